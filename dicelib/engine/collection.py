"""
Ordered collections of dice.
"""
import logging
from typing import Any, Iterable, Iterator, Sequence

from dicelib.shared import notation
from dicelib.shared.constants import DEFAULT_ADVANTAGE_ROLLS, MIN_STANDARD_SIZE
from dicelib.shared.enums import RollMethod
from dicelib.shared.errors import InvalidSizeError, NegativeCountError, NullOrEmptyInputError
from dicelib.shared.protocol import DiceRecord

from .die import CheckResult, Die, resolve_method

logger = logging.getLogger(__name__)


class DiceCollection:
    """
    An ordered group of independent dice.

    Every operation is applied to each die in turn and returns one entry per
    die, in collection order.
    """

    def __init__(self, dice: Iterable[Die] | None = None):
        self._dice: list[Die] = list(dice) if dice is not None else []

    # =========================================================================
    # Population
    # =========================================================================

    def append(self, die: Die) -> "DiceCollection":
        self._dice.append(die)
        return self

    def extend(self, dice: Iterable[Die]) -> "DiceCollection":
        self._dice.extend(dice)
        return self

    def add(self, n: int, size: int) -> "DiceCollection":
        """
        Add ``n`` numbered dice with faces 1..size.

        Returns:
            This collection, for chaining
        """
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")
        if size < MIN_STANDARD_SIZE:
            raise InvalidSizeError(f"Die size cannot be less than {MIN_STANDARD_SIZE} (got {size})")

        for _ in range(n):
            self._dice.append(Die.standard(size))
        return self

    def doubled(self) -> "DiceCollection":
        """Return a new collection holding every die twice, unseeded."""
        dice = DiceCollection()
        for die in self._dice:
            dice.append(die.copy())
            dice.append(die.copy())
        logger.info(f"Doubled {len(self._dice)} dice")
        return dice

    # =========================================================================
    # Rolls
    # =========================================================================

    def roll(self, method: RollMethod | str = RollMethod.NORMAL) -> list:
        """Roll every die once."""
        method = resolve_method(method)
        return [die.roll(method) for die in self._dice]

    def roll_many(self, n: int, method: RollMethod | str = RollMethod.NORMAL) -> list:
        """
        Roll every die ``n`` times.

        Each die finishes its ``n`` rolls before the next die starts, so the
        result holds ``n`` entries per die, grouped by die.
        """
        method = resolve_method(method)
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")

        rolls = []
        for die in self._dice:
            rolls.extend(die.roll_many(n, method))
        return rolls

    def total(self, method: RollMethod | str = RollMethod.NORMAL) -> Any:
        """Sum of one roll of every die."""
        return sum(self.roll(method))

    def advantage(self, n: int = DEFAULT_ADVANTAGE_ROLLS) -> list:
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")
        return [die.advantage(n) for die in self._dice]

    def disadvantage(self, n: int = DEFAULT_ADVANTAGE_ROLLS) -> list:
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")
        return [die.disadvantage(n) for die in self._dice]

    def reroll(self, value: Any, once: bool = True) -> list:
        return [die.reroll(value, once) for die in self._dice]

    def target(self, n: int, value: Any) -> list[int]:
        """Count of results reaching ``value`` in ``n`` rolls, per die."""
        if n < 0:
            raise NegativeCountError(f"Count cannot be negative (got {n})")
        return [die.target(n, value) for die in self._dice]

    def check(
        self,
        dc: int,
        method: RollMethod | str = RollMethod.NORMAL,
        modifier: int = 0,
        crits: bool = False,
    ) -> list[CheckResult]:
        method = resolve_method(method)
        return [die.check(dc, method, modifier, crits) for die in self._dice]

    def dc(
        self,
        dc: int,
        method: RollMethod | str = RollMethod.NORMAL,
        modifier: int = 0,
        crits: bool = False,
    ) -> list[bool]:
        """Difficulty check for each die."""
        return [result.success for result in self.check(dc, method, modifier, crits)]

    # =========================================================================
    # Serialization
    # =========================================================================

    @classmethod
    def parse(cls, text: str | Sequence[str] | None) -> "DiceCollection":
        """
        Parse dice from text with one die per line, or from a sequence of
        die strings.
        """
        if text is None:
            raise NullOrEmptyInputError("Dice text cannot be null")
        if isinstance(text, str) and not text.strip():
            raise NullOrEmptyInputError("Dice text cannot be empty or whitespace")

        lines = notation.split_lines(text) if isinstance(text, str) else list(text)
        dice = cls(Die.parse(line) for line in lines)
        logger.info(f"Parsed {len(dice)} dice")
        return dice

    @classmethod
    def from_json(cls, json_str: str) -> "DiceCollection":
        """Create a collection from a JSON list of die records."""
        return cls(Die.from_record(record) for record in DiceRecord.from_json(json_str).dice)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON list of die records."""
        return DiceRecord([die.to_record() for die in self._dice]).to_json(indent=indent)

    def __str__(self) -> str:
        return notation.join_lines(str(die) for die in self._dice)

    def __repr__(self) -> str:
        return f"DiceCollection({self._dice!r})"

    # =========================================================================
    # Container protocol
    # =========================================================================

    def __iter__(self) -> Iterator[Die]:
        return iter(self._dice)

    def __len__(self) -> int:
        return len(self._dice)

    def __getitem__(self, index: int) -> Die:
        return self._dice[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiceCollection):
            return NotImplemented
        return self._dice == other._dice
