"""
Enumerations used throughout the library.
"""
from enum import Enum


class RollMethod(str, Enum):
    """Strategies for turning raw rolls of a die into one result."""
    NORMAL = "NORMAL"
    ADVANTAGE = "ADVANTAGE"
    DISADVANTAGE = "DISADVANTAGE"
    EXPLODING = "EXPLODING"


class CriticalType(str, Enum):
    """Critical outcome of a difficulty check."""
    NONE = "NONE"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
