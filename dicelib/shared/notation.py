"""
Delimited text form of a die.

A die is written as its faces joined by ``,``; a weighted die appends ``:``
and its weights joined by ``,``::

    1,2,3,4          four faces, uniform
    1,2,3:1,1,2      three faces, 3 is twice as likely as 1 or 2

Seeds are not part of this form. A collection is one die per line.
"""
import logging
import os
import re
from typing import Iterable

from dicelib.engine.faces import FaceSet
from dicelib.shared.constants import MAX_SECTIONS, SECTION_SEPARATOR, VALUE_SEPARATOR
from dicelib.shared.errors import MalformedInputError, NullOrEmptyInputError, UnsyncedDataError

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _parse_values(section: str, text: str) -> list[int]:
    values = []
    for token in section.split(VALUE_SEPARATOR):
        token = token.strip()
        if not INTEGER_RE.fullmatch(token):
            raise MalformedInputError(f"{text!r} is not in the right format: bad value {token!r}")
        values.append(int(token))
    return values


def parse_face_set(text: str | None) -> FaceSet:
    """
    Parse the delimited form of a single die.

    A weights section holding a single value is ignored and yields a plain
    die, matching how one-face weighted dice are written out.

    Raises:
        NullOrEmptyInputError: If ``text`` is None, empty or whitespace
        MalformedInputError: If ``text`` does not follow the grammar or
            describes an invalid face/weight pairing
    """
    if text is None or not text.strip():
        raise NullOrEmptyInputError("Die text cannot be null, empty, or whitespace")

    sections = text.split(SECTION_SEPARATOR)
    if len(sections) > MAX_SECTIONS:
        raise MalformedInputError(
            f"{text!r} is not in the right format: expected at most {MAX_SECTIONS} sections, "
            f"got {len(sections)}"
        )

    faces = _parse_values(sections[0], text)
    weights = _parse_values(sections[1], text) if len(sections) == 2 else []

    if len(weights) > 1:
        try:
            face_set = FaceSet.of(faces, weights)
        except UnsyncedDataError as e:
            raise MalformedInputError(f"{text!r} is not in the right format: {e}") from e
    else:
        if weights:
            logger.warning(f"Ignoring single weight in {text!r}")
        face_set = FaceSet.of(faces)

    logger.debug(f"Parsed {text!r} into {len(faces)} faces")
    return face_set


def format_face_set(face_set: FaceSet) -> str:
    """Write a FaceSet in delimited form."""
    text = VALUE_SEPARATOR.join(str(face) for face in face_set.faces)
    if face_set.weights is not None:
        text += SECTION_SEPARATOR + VALUE_SEPARATOR.join(str(w) for w in face_set.weights)
    return text


def split_lines(text: str | None) -> list[str]:
    """
    Split collection text into one die string per line.

    Raises:
        NullOrEmptyInputError: If ``text`` is None
    """
    if text is None:
        raise NullOrEmptyInputError("Dice text cannot be null")
    return text.splitlines()


def join_lines(lines: Iterable[str]) -> str:
    """Join die strings with the platform newline."""
    return os.linesep.join(lines)
