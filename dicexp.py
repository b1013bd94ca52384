#!/usr/bin/env python3
"""
dicexp.py — command line dice expression interpreter.

Rolls each expression in order with one random source and prints one line
per expression. A bad expression is reported on stderr and the remaining
ones are still rolled; the exit status is 1 if any expression failed.

Configuration: environment variables with the DICEXP_ prefix or a .env file
(e.g. DICEXP_SEED=42, DICEXP_LOG_LEVEL=DEBUG).

Usage:
    python dicexp.py 1d20+3
    python dicexp.py -a -r "3d6" "2d8+5" "4d6/10-5"
    python dicexp.py -q -s 42 1d100
    python dicexp.py -r -- -3d6+20      # "--" before expressions starting with "-"
"""
from __future__ import annotations

import argparse
import logging
import sys
from fractions import Fraction
from typing import Optional

from rich.console import Console

from adapters.random_source.seeded_rng import new_simple_rng, simple_rng
from config import Settings
from contracts import DiceRoll
from dice_bag import DiceBag
from errors import DiceExpressionError

logger = logging.getLogger("dicexp.cli")


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None
_ERR_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
    return _CONSOLE


def _err_console() -> Console:
    global _ERR_CONSOLE
    if _ERR_CONSOLE is None:
        _ERR_CONSOLE = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)
    return _ERR_CONSOLE


def _format_average(average: Fraction, digits: int) -> str:
    """Fixed-point rendering of the exact average, rounded half to even."""
    if digits <= 0:
        return str(round(average))
    scale = 10 ** digits
    scaled = round(average * scale)
    whole, frac = divmod(abs(scaled), scale)
    sign = "-" if scaled < 0 else ""
    return f"{sign}{whole}.{frac:0{digits}d}"


def format_roll(
    expression: str,
    roll: DiceRoll,
    *,
    show_average: bool = False,
    show_range: bool = False,
    quiet: bool = False,
    average_digits: int = 1,
) -> str:
    """One output line: "EXPR => TOTAL (MIN-MAX, AVG ave.)" or just "TOTAL" when quiet."""
    if quiet:
        return str(roll.total)
    line = f"{expression} => {roll.total}"
    extras = []
    if show_range:
        extras.append(f"{roll.min}-{roll.max}")
    if show_average:
        extras.append(f"{_format_average(roll.average, average_digits)} ave.")
    if extras:
        line += f" ({', '.join(extras)})"
    return line


# -- main ------------------------------------------------------------------

def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.app_title,
        description="Roll RPG dice notation expressions (e.g. \"1d20+3\")",
    )
    parser.add_argument("-a", "--average", dest="show_average", action="store_true",
                        help="Show the average result for each dice expression")
    parser.add_argument("-r", "--range", dest="show_range", action="store_true",
                        help="Show the minimum and maximum possible result for each dice expression")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Show only the roll results (incompatible with -a/--average and -r/--range)")
    parser.add_argument("-s", "--seed", type=int, default=None, metavar="INTEGER",
                        help="Seed for the random number generator")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {settings.app_version}")
    parser.add_argument("expressions", nargs="*", metavar="EXPR",
                        help="One or more RPG dice notation expressions (eg \"1d20+3\")")
    return parser


def _run(args: argparse.Namespace, settings: Settings) -> int:
    seed = args.seed if args.seed is not None else settings.seed
    dice = DiceBag(simple_rng(seed) if seed is not None else new_simple_rng())
    logger.debug("Rolling %d expression(s) with %r", len(args.expressions), dice.rng)

    failed = 0
    for exp in args.expressions:
        try:
            roll = dice.eval(exp)
        except DiceExpressionError as exc:
            failed += 1
            logger.debug("Expression %r failed with %s", exp, exc.code)
            _err_console().print(f"{exp} => error: {exc}")
            continue
        try:
            line = format_roll(
                exp,
                roll,
                show_average=args.show_average,
                show_range=args.show_range,
                quiet=args.quiet,
                average_digits=settings.average_digits,
            )
        except ValueError:
            # int -> str conversion limit (sys.set_int_max_str_digits)
            failed += 1
            _err_console().print(f"{exp} => error: result too large to display")
            continue
        _console().print(line)
    return 1 if failed else 0


def main(argv: Optional[list[str]] = None) -> int:
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    parser = _build_parser(settings)
    args = parser.parse_args(argv)
    if args.quiet and (args.show_average or args.show_range):
        parser.error("-q/--quiet is not compatible with -a/--average and -r/--range")
    if not args.expressions:
        parser.error("no dice expressions given")

    return _run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
