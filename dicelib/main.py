"""
Demonstration entry point: parse dice and roll them.

Usage:
    python -m dicelib.main "1,2,3,4,5,6" "1,2,3:1,1,2" --times 3 --method ADVANTAGE

Or:
    dicelib "1,2,3,4,5,6" --dc 4 --modifier 1 --crits
"""

import argparse
import logging
import sys

from dicelib.config import settings
from dicelib.engine import DiceCollection, Die
from dicelib.shared.enums import RollMethod
from dicelib.shared.errors import DiceError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Roll dice written as 'f1,f2,...[:w1,w2,...]'")
    parser.add_argument("dice", nargs="+", help="Die strings, e.g. 1,2,3,4 or 1,2,3:1,1,2")
    parser.add_argument("--times", type=int, default=1, help="Rolls per die (default: 1)")
    parser.add_argument(
        "--method",
        default=RollMethod.NORMAL.value,
        choices=[m.value for m in RollMethod],
        type=str.upper,
        help="Roll method (default: NORMAL)",
    )
    parser.add_argument("--seed", type=int, default=settings.DEFAULT_SEED, help="Seed for reproducible rolls")
    parser.add_argument("--dc", type=int, default=None, help="Run a difficulty check against this value")
    parser.add_argument("--modifier", type=int, default=0, help="Modifier added for difficulty checks")
    parser.add_argument("--crits", action="store_true", help="Natural max/min decide difficulty checks")
    parser.add_argument("--json", action="store_true", help="Print the dice as JSON records")
    return parser


def run(args: argparse.Namespace) -> int:
    """Roll the dice described by parsed arguments and print the results."""
    dice = DiceCollection()
    for i, text in enumerate(args.dice):
        seed = None if args.seed is None else args.seed + i
        dice.append(Die.parse(text, seed=seed))

    if args.json:
        print(dice.to_json())
        return 0

    for die in dice:
        if args.dc is not None:
            result = die.check(args.dc, args.method, args.modifier, args.crits)
            outcome = "success" if result.success else "failure"
            if result.is_critical:
                outcome = f"critical {outcome}"
            print(f"{die}: rolled {result.roll}{result.modifier:+d} = {result.total} vs DC {result.dc} -> {outcome}")
        else:
            rolls = die.roll_many(args.times, args.method)
            print(f"{die}: {', '.join(str(r) for r in rolls)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the dice demo."""
    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    args = build_parser().parse_args(argv)

    try:
        return run(args)
    except DiceError as e:
        logger.error(f"Could not roll dice: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
