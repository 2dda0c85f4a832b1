"""
Repositories package.
"""

from app.repositories.accident import AccidentRepository
from app.repositories.accident_type import AccidentTypeRepository
from app.repositories.aggregator import aggregate_accidents
from app.repositories.rule import RuleRepository

__all__ = [
    "AccidentRepository",
    "AccidentTypeRepository",
    "RuleRepository",
    "aggregate_accidents",
]
