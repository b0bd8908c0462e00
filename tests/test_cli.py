import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

import pytest

from scicalc.calculator import Calculator
from scicalc.cli import execute, help_text, main, repl
from scicalc.state import AngleUnit


def test_execute_expression():
    calc = Calculator()
    assert execute(calc, "2+3") == "= 5"
    assert execute(calc, "1/0") == "= ERROR: Parse error"


def test_angle_commands():
    calc = Calculator()
    assert execute(calc, "rad") == "Angle mode: RAD"
    assert calc.angle_unit == AngleUnit.RADIANS
    assert execute(calc, "DEG") == "Angle mode: DEG"
    assert calc.angle_unit == AngleUnit.DEGREES


def test_memory_commands():
    calc = Calculator()
    assert execute(calc, "ms 5") == "M = 5"
    assert execute(calc, "m+ 2") == "M = 7"
    assert execute(calc, "m- 1") == "M = 6"
    assert execute(calc, "mr") == "M = 6"
    assert execute(calc, "M*2") == "= 12"
    assert execute(calc, "m+") == "M = 18"
    assert execute(calc, "mc") == "Memory cleared"
    assert calc.memory_recall() == 0


def test_memory_command_with_bad_expression():
    calc = Calculator()
    with pytest.raises(ValueError):
        execute(calc, "ms 2+")


def test_history_commands():
    calc = Calculator()
    assert execute(calc, "history") == "No history yet"
    execute(calc, "2*21")
    assert execute(calc, "history") == "  2*21 = 42"
    assert execute(calc, "clear") == "Cleared history"
    assert execute(calc, "history") == "No history yet"


def test_help_lists_functions_and_constants():
    text = help_text()
    assert "factorial" in text
    assert "atan2" in text
    assert "π" in text
    assert "quit" in text


def test_repl_session(capsys):
    lines = iter(["2*3", "", "sqrt(-4)", "quit"])
    repl(Calculator(), read=lambda prompt: next(lines))

    out = capsys.readouterr().out
    assert "= 6" in out
    assert "= ERROR: Parse error" in out
    assert "Goodbye!" in out


def test_repl_stops_at_end_of_input(capsys):
    def read(prompt):
        raise EOFError

    repl(Calculator(), read=read)
    assert "SCIENTIFIC CALCULATOR" in capsys.readouterr().out


def test_main_one_shot(capsys):
    assert main(["2", "+", "2"]) == 0
    assert capsys.readouterr().out == "4\n"


def test_main_reports_errors(capsys):
    assert main(["1/0"]) == 1
    assert capsys.readouterr().out == "ERROR: Parse error\n"


def test_main_radians_and_precision(capsys):
    assert main(["--radians", "--precision", "4", "sin(1)"]) == 0
    assert capsys.readouterr().out == "0.8415\n"


def test_main_rejects_negative_precision(capsys):
    assert main(["--precision", "-1", "1"]) == 2
