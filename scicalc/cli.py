#!/usr/bin/env python3
"""
Command line scientific calculator.

With an expression argument it prints one result and exits; without one it
starts an interactive session.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .calculator import Calculator
from .config import DEFAULT_PRECISION, setup_logging
from .dispatch import BINARY_FUNCTIONS, UNARY_FUNCTIONS
from .state import AngleUnit
from .tokenizer import CONSTANTS

logger = logging.getLogger(__name__)

COMMANDS = {
    'help': "Show this help",
    'history': "Show calculation history",
    'clear': "Clear history",
    'deg': "Use degrees for trigonometric functions",
    'rad': "Use radians for trigonometric functions",
    'ms [expr]': "Store expression (or last answer) in memory",
    'm+ [expr]': "Add to memory",
    'm- [expr]': "Subtract from memory",
    'mr': "Recall memory",
    'mc': "Clear memory",
    'quit': "Exit calculator",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scicalc", description="Scientific calculator")
    parser.add_argument("expression", nargs="*", help="expression to evaluate")
    parser.add_argument("--radians", action="store_true",
                        help="evaluate trigonometric functions in radians")
    parser.add_argument("--precision", type=int, default=DEFAULT_PRECISION,
                        help="significant digits shown (default: %(default)s)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def help_text() -> str:
    unary = ", ".join(sorted(function.value for function in UNARY_FUNCTIONS))
    binary = ", ".join(sorted(function.value for function in BINARY_FUNCTIONS))
    constants = ", ".join(CONSTANTS)

    lines = [
        "Operators: + - * / ^ %  (^ applies left to right)",
        f"Functions f(x): {unary}",
        f"Functions f(x, y): {binary}",
        f"Constants: {constants}",
        "Variables: M, mem (memory), ans, ANS (last result)",
        "",
        "Commands:",
    ]
    lines.extend(f"  {name:<10} - {text}" for name, text in COMMANDS.items())
    return "\n".join(lines)


def _memory_operand(calc: Calculator, argument: str) -> float:
    """Value for a memory key: the argument's result, or the last answer"""
    if not argument:
        return calc.last_result

    outcome = calc.evaluate(argument)
    if not outcome.ok:
        raise ValueError(outcome.message)
    return outcome.value


def execute(calc: Calculator, line: str) -> str:
    """Run one command or expression and return the text to show"""
    command, _, argument = line.partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command == 'help':
        return help_text()

    if command == 'history':
        entries = calc.recent_history()
        if not entries:
            return "No history yet"
        return "\n".join(
            f"  {entry.expression} = {calc.format_value(entry.result)}" for entry in entries
        )

    if command == 'clear':
        calc.clear_history()
        return "Cleared history"

    if command in ('deg', 'rad'):
        calc.set_angle_unit(AngleUnit.DEGREES if command == 'deg' else AngleUnit.RADIANS)
        return f"Angle mode: {calc.angle_unit.value}"

    if command == 'ms':
        calc.memory_store(_memory_operand(calc, argument))
        return f"M = {calc.format_value(calc.memory_recall())}"

    if command == 'm+':
        calc.memory_add(_memory_operand(calc, argument))
        return f"M = {calc.format_value(calc.memory_recall())}"

    if command == 'm-':
        calc.memory_subtract(_memory_operand(calc, argument))
        return f"M = {calc.format_value(calc.memory_recall())}"

    if command == 'mr':
        return f"M = {calc.format_value(calc.memory_recall())}"

    if command == 'mc':
        calc.memory_clear()
        return "Memory cleared"

    return f"= {calc.format(calc.evaluate(line))}"


def repl(calc: Calculator, read: Callable[[str], str] = input) -> None:
    print("=" * 60)
    print("SCIENTIFIC CALCULATOR")
    print("=" * 60)
    print(f"Angle mode: {calc.angle_unit.value}    Type 'help' for commands")
    print()

    while True:
        try:
            user_input = read("calc> ").strip()

            if not user_input:
                continue

            if user_input.lower() == 'quit':
                print("Goodbye!")
                break

            print(execute(calc, user_input))
            print()

        except (KeyboardInterrupt, EOFError):
            print()
            break
        except ValueError as e:
            print(f"Error: {e}\n")
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            print(f"Unexpected error: {e}\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    calc = Calculator()
    try:
        calc.set_precision(args.precision)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.radians:
        calc.set_angle_unit(AngleUnit.RADIANS)

    if args.expression:
        outcome = calc.evaluate(" ".join(args.expression))
        print(calc.format(outcome))
        return 0 if outcome.ok else 1

    repl(calc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
