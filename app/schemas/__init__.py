"""
Schema and DTO package.
"""

from app.schemas.accident import Accident, AccidentType, Rule

__all__ = [
    "Accident",
    "AccidentType",
    "Rule",
]
