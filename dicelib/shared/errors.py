"""
Exceptions raised by the dice library.

Every failure is local and synchronous: nothing is retried and no partial
result is returned.
"""


class DiceError(Exception):
    """Base exception for dice library errors."""
    pass


class InvalidSizeError(DiceError, ValueError):
    """A die has fewer faces than the operation requires."""
    pass


class EmptyFacesError(InvalidSizeError):
    """A die with no faces was rolled."""
    pass


class InvalidCountError(DiceError, ValueError):
    """A repetition count is outside the accepted range."""
    pass


class NegativeCountError(InvalidCountError):
    """A repetition count is negative."""
    pass


class UnrecognizedMethodError(DiceError, ValueError):
    """A roll method outside the RollMethod enumeration."""
    pass


class DegenerateExplodingError(DiceError, ValueError):
    """Exploding roll requested on a die whose faces are all equal."""
    pass


class InvalidThresholdError(DiceError, ValueError):
    """A reroll or explode threshold the die can never get past."""
    pass


class UnsyncedDataError(DiceError, ValueError):
    """Faces and weights disagree in length, or a weight is unusable."""
    pass


class MalformedInputError(DiceError, ValueError):
    """Text or record does not follow the die grammar."""
    pass


class NullOrEmptyInputError(MalformedInputError):
    """Input text is None, empty, or only whitespace."""
    pass


class IndexOutOfBoundsError(DiceError, IndexError):
    """A face index outside [0, size)."""
    pass
