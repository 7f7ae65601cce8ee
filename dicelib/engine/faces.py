"""
Face values and optional weights owned by a die.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from dicelib.shared.errors import IndexOutOfBoundsError, UnsyncedDataError


@dataclass(frozen=True)
class FaceSet:
    """
    Ordered faces of a die, optionally paired with relative weights.

    ``weights[i]`` is the probability mass of ``faces[i]``. Instances are
    immutable; editing returns a new, validated FaceSet.
    """

    faces: tuple
    weights: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "faces", tuple(self.faces))
        if self.weights is not None:
            object.__setattr__(self, "weights", tuple(self.weights))
        self.validate()

    @classmethod
    def of(cls, faces: Iterable[Any], weights: Iterable[int] | None = None) -> "FaceSet":
        """Build a FaceSet from any iterables."""
        return cls(tuple(faces), None if weights is None else tuple(weights))

    @property
    def size(self) -> int:
        """Number of faces."""
        return len(self.faces)

    @property
    def is_weighted(self) -> bool:
        """Check if the faces carry weights."""
        return self.weights is not None

    @property
    def total_weight(self) -> int:
        """Sum of weights, or the face count for an unweighted set."""
        if self.weights is None:
            return self.size
        return sum(self.weights)

    def validate(self) -> None:
        """
        Check the face/weight pairing.

        Raises:
            UnsyncedDataError: If weights are present and their count differs
                from the face count, any weight is negative or not an integer,
                all weights are zero, or the set has no faces.
        """
        if self.weights is None:
            return

        if not self.faces:
            raise UnsyncedDataError("A die without faces cannot carry weights")

        if len(self.weights) != len(self.faces):
            raise UnsyncedDataError(
                f"Weights must contain {len(self.faces)} values, "
                f"currently contains {len(self.weights)}"
            )

        bad = [w for w in self.weights if isinstance(w, bool) or not isinstance(w, int)]
        if bad:
            raise UnsyncedDataError(f"Weights must be integers, got: {bad}")

        negative = [w for w in self.weights if w < 0]
        if negative:
            raise UnsyncedDataError(f"Weights cannot be negative, offending values: {negative}")

        if sum(self.weights) <= 0:
            raise UnsyncedDataError("Weights must sum to more than zero")

    def with_face(self, face: Any, weight: int | None = None) -> "FaceSet":
        """
        Return a copy with ``face`` appended.

        Args:
            face: Face value to add
            weight: Weight of the new face; required for weighted sets and
                rejected for unweighted ones

        Returns:
            New FaceSet
        """
        if self.weights is None:
            if weight is not None:
                raise UnsyncedDataError("Cannot add a weighted face to an unweighted die")
            return FaceSet(self.faces + (face,))

        if weight is None:
            raise UnsyncedDataError("A weight is required when adding a face to a weighted die")
        return FaceSet(self.faces + (face,), self.weights + (weight,))

    def without_face(self, index: int) -> "FaceSet":
        """
        Return a copy with the face (and its weight) at ``index`` removed.

        Raises:
            IndexOutOfBoundsError: If ``index`` is outside [0, size)
        """
        if index < 0 or index >= self.size:
            raise IndexOutOfBoundsError(
                f"Index must be between 0 and {self.size}, upper bound exclusive (got {index})"
            )

        faces = self.faces[:index] + self.faces[index + 1:]
        if self.weights is None or not faces:
            return FaceSet(faces)
        return FaceSet(faces, self.weights[:index] + self.weights[index + 1:])


def standard_faces(size: int) -> Sequence[int]:
    """Faces 1..size of an ordinary numbered die."""
    return tuple(range(1, size + 1))
