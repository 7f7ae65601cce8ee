"""
Dice rolling mechanics.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from dicelib.shared.constants import DEFAULT_ADVANTAGE_ROLLS, MIN_ROLLABLE_SIZE, MIN_STANDARD_SIZE
from dicelib.shared.enums import CriticalType, RollMethod
from dicelib.shared.errors import (
    DegenerateExplodingError,
    EmptyFacesError,
    InvalidCountError,
    InvalidSizeError,
    InvalidThresholdError,
    MalformedInputError,
    NegativeCountError,
    UnrecognizedMethodError,
    UnsyncedDataError,
)
from dicelib.shared import notation
from dicelib.shared.protocol import DieRecord

from .faces import FaceSet, standard_faces
from .rng import RandomSource, Rng

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Outcome of a difficulty check."""
    roll: int
    modifier: int
    dc: int
    success: bool
    critical: CriticalType = CriticalType.NONE

    @property
    def total(self) -> int:
        """Roll plus modifier."""
        return self.roll + self.modifier

    @property
    def is_critical(self) -> bool:
        """Check if the result was decided by a critical roll."""
        return self.critical != CriticalType.NONE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "roll": self.roll,
            "modifier": self.modifier,
            "total": self.total,
            "dc": self.dc,
            "success": self.success,
            "critical": self.critical.value,
        }


def resolve_method(method: RollMethod | str) -> RollMethod:
    """
    Normalize a roll method tag.

    Accepts RollMethod members or their names in any case.

    Raises:
        UnrecognizedMethodError: If the tag is not a known method
    """
    if isinstance(method, RollMethod):
        return method
    if isinstance(method, str):
        try:
            return RollMethod(method.strip().upper())
        except ValueError:
            pass
    raise UnrecognizedMethodError(
        f"Unrecognized roll method {method!r}, expected one of "
        f"{', '.join(m.value for m in RollMethod)}"
    )


class Die:
    """
    A rollable die.

    Owns an immutable FaceSet and a private random source. When the faces
    carry weights the die rolls by weight, otherwise every face index is
    equally likely.
    """

    def __init__(
        self,
        faces: FaceSet | Iterable[Any],
        weights: Iterable[int] | None = None,
        seed: int | None = None,
        rng: RandomSource | None = None,
    ):
        """
        Initialize a die.

        Args:
            faces: Face values, or a ready FaceSet
            weights: Optional relative weight per face
            seed: Optional seed for reproducible rolls
            rng: Optional random source; overrides ``seed`` when given
        """
        if isinstance(faces, FaceSet):
            if weights is not None:
                faces = FaceSet.of(faces.faces, weights)
            self._face_set = faces
        else:
            self._face_set = FaceSet.of(faces, weights)

        self._seed = seed
        self._rng = rng if rng is not None else Rng(seed)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def standard(cls, size: int, seed: int | None = None) -> "Die":
        """
        Create a numbered die with faces 1..size.

        Raises:
            InvalidSizeError: If size is less than 2
        """
        if size < MIN_STANDARD_SIZE:
            raise InvalidSizeError(f"Die size cannot be less than {MIN_STANDARD_SIZE} (got {size})")
        return cls(standard_faces(size), seed=seed)

    @classmethod
    def weighted(cls, faces: Iterable[Any], weights: Iterable[int], seed: int | None = None) -> "Die":
        """Create a die whose faces are rolled by weight."""
        return cls(faces, weights, seed=seed)

    @classmethod
    def parse(cls, text: str, seed: int | None = None) -> "Die":
        """
        Create a die from its delimited text form, e.g. ``"1,2,3:1,1,2"``.

        The seed is not part of the text form and can be supplied separately.
        """
        return cls(notation.parse_face_set(text), seed=seed)

    @classmethod
    def from_record(cls, record: DieRecord) -> "Die":
        """Create a die from a structured record."""
        try:
            return cls(record.faces, record.weights, seed=record.seed)
        except UnsyncedDataError as e:
            raise MalformedInputError(f"Record does not describe a valid die: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "Die":
        """Create a die from its JSON record."""
        return cls.from_record(DieRecord.from_json(json_str))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def face_set(self) -> FaceSet:
        return self._face_set

    @property
    def faces(self) -> tuple:
        return self._face_set.faces

    @property
    def weights(self) -> tuple[int, ...] | None:
        return self._face_set.weights

    @property
    def is_weighted(self) -> bool:
        return self._face_set.is_weighted

    @property
    def size(self) -> int:
        return self._face_set.size

    @property
    def seed(self) -> int | None:
        """Seed the die was created with, if any."""
        if self._seed is None:
            return getattr(self._rng, "seed", None)
        return self._seed

    @property
    def max(self) -> Any:
        """Highest face value (weights are ignored)."""
        self._require_faces()
        return max(self.faces)

    @property
    def min(self) -> Any:
        """Lowest face value (weights are ignored)."""
        self._require_faces()
        return min(self.faces)

    @property
    def average(self) -> float:
        """Mean of the face values (weights are ignored)."""
        self._require_faces()
        return sum(self.faces) / self.size

    # =========================================================================
    # Raw rolls
    # =========================================================================

    def _require_faces(self) -> None:
        if self.size < MIN_ROLLABLE_SIZE:
            raise EmptyFacesError(f"Cannot roll a die with {self.size} faces")

    @staticmethod
    def _require_count(n: int, minimum: int = 0) -> None:
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")
        if n < minimum:
            raise InvalidCountError(f"Count must be at least {minimum} (got {n})")

    def _weighted_index(self) -> int:
        """
        Pick a face index by walking the cumulative weights.

        The pairing is re-validated before drawing so a corrupted FaceSet
        never yields a roll.
        """
        self._face_set.validate()
        weights = self._face_set.weights

        rolled_weight = self._rng.next_in_range(sum(weights))
        for i, weight in enumerate(weights):
            if rolled_weight < weight:
                return i
            rolled_weight -= weight

        raise UnsyncedDataError("Drawn weight fell outside the die's weights")

    def _rollable_faces(self) -> list:
        """Faces that can actually come up (non-zero weight)."""
        if not self.is_weighted:
            return list(self.faces)
        return [face for face, weight in zip(self.faces, self.weights) if weight > 0]

    def _roll_once(self) -> Any:
        self._require_faces()
        if self.is_weighted:
            index = self._weighted_index()
        else:
            index = self._rng.next_in_range(self.size)
        return self.faces[index]

    def _roll_raw(self, n: int) -> list:
        self._require_faces()
        self._require_count(n)
        return [self._roll_once() for _ in range(n)]

    # =========================================================================
    # Roll methods
    # =========================================================================

    def roll(self, method: RollMethod | str = RollMethod.NORMAL) -> Any:
        """
        Roll the die once using ``method``.

        Args:
            method: NORMAL rolls once, ADVANTAGE/DISADVANTAGE keep the
                higher/lower of two rolls, EXPLODING keeps rolling while the
                maximum face comes up and sums everything

        Returns:
            The rolled value
        """
        self._require_faces()
        method = resolve_method(method)

        if method == RollMethod.NORMAL:
            result = self._roll_once()
        elif method == RollMethod.ADVANTAGE:
            result = max(self._roll_raw(DEFAULT_ADVANTAGE_ROLLS))
        elif method == RollMethod.DISADVANTAGE:
            result = min(self._roll_raw(DEFAULT_ADVANTAGE_ROLLS))
        else:
            result = sum(self.explode())

        logger.debug(f"Rolled {result} on {self} ({method.value})")
        return result

    def roll_many(self, n: int, method: RollMethod | str = RollMethod.NORMAL) -> list:
        """
        Roll the die ``n`` times using ``method``.

        Returns:
            Results in call order
        """
        self._require_faces()
        method = resolve_method(method)
        self._require_count(n)
        return [self.roll(method) for _ in range(n)]

    def advantage(self, n: int = DEFAULT_ADVANTAGE_ROLLS) -> Any:
        """Roll ``n`` times and keep the highest."""
        self._require_faces()
        self._require_count(n, minimum=1)
        return max(self._roll_raw(n))

    def disadvantage(self, n: int = DEFAULT_ADVANTAGE_ROLLS) -> Any:
        """Roll ``n`` times and keep the lowest."""
        self._require_faces()
        self._require_count(n, minimum=1)
        return min(self._roll_raw(n))

    def reroll(self, value: Any, once: bool = True) -> Any:
        """
        Roll, rerolling results at or below ``value``.

        Args:
            value: Results less than or equal to this are rerolled
            once: Reroll a single time and keep that result; when False,
                keep rerolling until a result above ``value`` comes up

        Returns:
            The kept roll
        """
        self._require_faces()
        if value >= self.max:
            raise InvalidThresholdError(
                f"Reroll value cannot be greater than or equal to the maximum face ({self.max})"
            )
        if not once and max(self._rollable_faces()) <= value:
            raise InvalidThresholdError(f"No face with weight rolls above {value}")

        result = self._roll_once()
        while result <= value:
            result = self._roll_once()
            if once:
                break
        return result

    def target(self, n: int, value: Any) -> int:
        """Roll ``n`` times and count results greater than or equal to ``value``."""
        rolls = self._roll_raw(n)
        return sum(1 for roll in rolls if roll >= value)

    def explode(self, threshold: Any = None) -> list:
        """
        Roll repeatedly while results reach ``threshold``.

        Args:
            threshold: Rolls at or above this grant another roll. Defaults
                to the maximum face.

        Returns:
            Every roll made, the last one below ``threshold``
        """
        self._require_faces()
        if threshold is None:
            if self.max == self.min:
                raise DegenerateExplodingError(
                    "Cannot exploding roll a die whose faces all have the same value"
                )
            threshold = self.max
        elif threshold <= self.min:
            raise InvalidThresholdError(
                f"Explode threshold cannot be less than or equal to the minimum face ({self.min})"
            )

        if min(self._rollable_faces()) >= threshold:
            raise DegenerateExplodingError(
                f"Every face with weight reaches the explode threshold ({threshold})"
            )

        rolls = [self._roll_once()]
        while rolls[-1] >= threshold:
            rolls.append(self._roll_once())
        return rolls

    def keep_highest(self, n: int, x: int) -> list:
        """Roll ``n`` times and return the ``x`` highest results, highest first."""
        self._require_count(x)
        if x > n:
            raise InvalidCountError(f"Cannot keep {x} of {n} rolls")
        return sorted(self._roll_raw(n), reverse=True)[:x]

    def keep_lowest(self, n: int, x: int) -> list:
        """Roll ``n`` times and return the ``x`` lowest results, lowest first."""
        self._require_count(x)
        if x > n:
            raise InvalidCountError(f"Cannot keep {x} of {n} rolls")
        return sorted(self._roll_raw(n))[:x]

    # =========================================================================
    # Difficulty checks
    # =========================================================================

    def check(
        self,
        dc: int,
        method: RollMethod | str = RollMethod.NORMAL,
        modifier: int = 0,
        crits: bool = False,
    ) -> CheckResult:
        """
        Roll against a difficulty class.

        With ``crits`` enabled, rolling the maximum face always succeeds and
        rolling the minimum face always fails, whatever the modifier.

        Args:
            dc: Total needed to succeed
            method: Roll method used for the single roll
            modifier: Added to the roll before comparing
            crits: Whether natural maximum/minimum decide the check

        Returns:
            CheckResult describing the roll
        """
        self._require_faces()
        method = resolve_method(method)

        roll = self.roll(method)
        if crits and roll == self.max:
            result = CheckResult(roll, modifier, dc, True, CriticalType.SUCCESS)
        elif crits and roll == self.min:
            result = CheckResult(roll, modifier, dc, False, CriticalType.FAILURE)
        else:
            result = CheckResult(roll, modifier, dc, roll + modifier >= dc)

        logger.debug(
            f"DC {dc} check: rolled {roll}{modifier:+d} -> "
            f"{'success' if result.success else 'failure'}"
            + (f" ({result.critical.value.lower()} critical)" if result.is_critical else "")
        )
        return result

    def dc(
        self,
        dc: int,
        method: RollMethod | str = RollMethod.NORMAL,
        modifier: int = 0,
        crits: bool = False,
    ) -> bool:
        """Roll against a difficulty class and report success."""
        return self.check(dc, method, modifier, crits).success

    # =========================================================================
    # Editing
    # =========================================================================

    def add_face(self, face: Any, weight: int | None = None) -> "Die":
        """
        Return a new die with ``face`` added.

        The new die keeps this die's seed but starts a fresh random sequence.
        """
        return Die(self._face_set.with_face(face, weight), seed=self._seed)

    def remove_face(self, index: int) -> "Die":
        """Return a new die without the face (and weight) at ``index``."""
        return Die(self._face_set.without_face(index), seed=self._seed)

    def copy(self, seed: int | None = None) -> "Die":
        """Return a die with the same faces and weights and a new random source."""
        return Die(self._face_set, seed=seed)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_record(self) -> DieRecord:
        """Convert to a structured record, seed included."""
        return DieRecord(
            faces=list(self.faces),
            weights=None if self.weights is None else list(self.weights),
            seed=self.seed,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self.to_record().to_dict()

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON record."""
        return self.to_record().to_json(indent=indent)

    def __str__(self) -> str:
        return notation.format_face_set(self._face_set)

    def __repr__(self) -> str:
        return f"Die({str(self)!r}, seed={self.seed!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Die):
            return NotImplemented
        return self._face_set == other._face_set

    def __hash__(self) -> int:
        return hash(self._face_set)
