"""
Structured record format for dice.

A die record is a JSON object::

    {"faces": [1, 2, 3], "weights": [1, 1, 2], "seed": 42}

``faces`` is required; ``weights`` and ``seed`` may be absent or null. Unlike
the delimited text form, records keep the seed. A collection is a JSON list
of die records.
"""

from dataclasses import dataclass, field
from typing import Any
import json

from dicelib.config import settings
from dicelib.shared.constants import FACES_FIELD, SEED_FIELD, WEIGHTS_FIELD
from dicelib.shared.errors import MalformedInputError, NullOrEmptyInputError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _resolve_indent(indent: int | None) -> int | None:
    if indent is None:
        indent = settings.JSON_INDENT
    return indent or None


def _load(json_str: str | None) -> Any:
    if json_str is None or not json_str.strip():
        raise NullOrEmptyInputError("Record text cannot be null, empty, or whitespace")
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Record is not valid JSON: {e}") from e


@dataclass
class DieRecord:
    """Serializable state of a single die."""
    faces: list[int]
    weights: list[int] | None = None
    seed: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            FACES_FIELD: list(self.faces),
            WEIGHTS_FIELD: None if self.weights is None else list(self.weights),
            SEED_FIELD: self.seed,
        }

    def to_json(self, indent: int | None = None) -> str:
        """
        Serialize record to JSON string.

        Args:
            indent: Spaces per nesting level; defaults to the configured
                indent, 0 writes compact JSON
        """
        return json.dumps(self.to_dict(), indent=_resolve_indent(indent))

    @classmethod
    def from_dict(cls, raw: Any) -> "DieRecord":
        """
        Create record from dictionary.

        Raises:
            MalformedInputError: If ``faces`` is missing or not a list of
                integers, or ``weights``/``seed`` have the wrong shape
        """
        if not isinstance(raw, dict):
            raise MalformedInputError(f"Die record must be an object, got {type(raw).__name__}")

        faces = raw.get(FACES_FIELD)
        if not isinstance(faces, list) or not all(_is_int(face) for face in faces):
            raise MalformedInputError(f"Die record field '{FACES_FIELD}' must be a list of integers")

        weights = raw.get(WEIGHTS_FIELD)
        if weights is not None and (
            not isinstance(weights, list) or not all(_is_int(w) for w in weights)
        ):
            raise MalformedInputError(f"Die record field '{WEIGHTS_FIELD}' must be a list of integers")

        seed = raw.get(SEED_FIELD)
        if seed is not None and not _is_int(seed):
            raise MalformedInputError(f"Die record field '{SEED_FIELD}' must be an integer")

        return cls(faces=faces, weights=weights, seed=seed)

    @classmethod
    def from_json(cls, json_str: str) -> "DieRecord":
        """Deserialize record from JSON string."""
        return cls.from_dict(_load(json_str))


@dataclass
class DiceRecord:
    """Serializable state of a dice collection."""
    dice: list[DieRecord] = field(default_factory=list)

    def to_list(self) -> list[dict]:
        return [record.to_dict() for record in self.dice]

    def to_json(self, indent: int | None = None) -> str:
        """Serialize collection to JSON string."""
        return json.dumps(self.to_list(), indent=_resolve_indent(indent))

    @classmethod
    def from_json(cls, json_str: str) -> "DiceRecord":
        """Deserialize collection from JSON string."""
        raw = _load(json_str)
        if not isinstance(raw, list):
            raise MalformedInputError(f"Dice record must be a list, got {type(raw).__name__}")
        return cls(dice=[DieRecord.from_dict(item) for item in raw])
