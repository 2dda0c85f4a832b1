"""
Database models package.

Import all tables here so Alembic and ``SQLModel.metadata`` can discover them.
"""

from app.db.models.accident_type import AccidentTypeRecord
from app.db.models.rule import RuleRecord
from app.db.models.accident import AccidentRecord, AccidentRuleLink
from app.db.models.user import AuthorityRecord, UserRecord

__all__ = [
    "AccidentTypeRecord",
    "RuleRecord",
    "AccidentRecord",
    "AccidentRuleLink",
    "UserRecord",
    "AuthorityRecord",
]
