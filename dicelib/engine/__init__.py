"""
Dice engine package.
"""
from .rng import Rng, RandomSource
from .faces import FaceSet
from .die import Die, CheckResult, resolve_method
from .collection import DiceCollection

__all__ = [
    "Rng",
    "RandomSource",
    "FaceSet",
    "Die",
    "CheckResult",
    "resolve_method",
    "DiceCollection",
]
