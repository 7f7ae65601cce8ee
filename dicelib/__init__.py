"""
Rollable dice: fixed-face, weighted and custom dice, collections of dice,
roll methods, difficulty checks and a compact text format.
"""
from dicelib.engine import Rng, RandomSource, FaceSet, Die, CheckResult, DiceCollection
from dicelib.shared.enums import RollMethod, CriticalType

__all__ = [
    "Rng",
    "RandomSource",
    "FaceSet",
    "Die",
    "CheckResult",
    "DiceCollection",
    "RollMethod",
    "CriticalType",
]
