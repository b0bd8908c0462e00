import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

import pytest

from scicalc.calculator import Calculator, evaluate
from scicalc.errors import CalcError
from scicalc.state import (
    AngleUnit,
    CalculatorState,
    create_state,
    memory_add,
    memory_clear,
    memory_recall,
    memory_store,
    memory_subtract,
    reset_state,
)


def test_new_state_defaults():
    state = create_state()
    assert state.memory == 0
    assert state.last_result == 0
    assert state.angle_unit == AngleUnit.DEGREES
    assert state.precision == 10
    assert state.last_expression == ""


def test_negative_precision_is_rejected():
    with pytest.raises(ValueError):
        CalculatorState(precision=-1)


def test_empty_or_missing_input_is_invalid():
    state = create_state()
    assert evaluate("", state).error == CalcError.INVALID_INPUT
    assert evaluate(None, state).error == CalcError.INVALID_INPUT
    assert evaluate("1+1", None).error == CalcError.INVALID_INPUT
    assert state.last_expression == ""


def test_parse_failures_are_reported_generically():
    state = create_state()
    for expression in ("2+(3", "foo(1)", "2+2 3", "10/0", "sqrt(-1)", "factorial(171)"):
        outcome = evaluate(expression, state)
        assert outcome.error == CalcError.PARSE_ERROR
        assert outcome.message == "Parse error"
        assert outcome.expression == expression
        assert outcome.position is None


def test_success_updates_last_result_and_expression():
    state = create_state()
    outcome = evaluate("3+4", state)
    assert outcome.ok
    assert outcome.value == 7
    assert state.last_result == 7
    assert state.last_expression == "3+4"


def test_failure_keeps_last_result_but_records_expression():
    state = create_state()
    evaluate("3+4", state)
    evaluate("1/0", state)
    assert state.last_result == 7
    assert state.last_expression == "1/0"


def test_overflowing_literal_is_an_error():
    state = create_state()
    evaluate("3+4", state)
    for expression in ("1e999", "-1e999"):
        outcome = evaluate(expression, state)
        assert outcome.error == CalcError.PARSE_ERROR
    assert state.last_result == 7


def test_last_expression_is_truncated():
    state = create_state()
    expression = "+".join(["1"] * 400)
    assert evaluate(expression, state).value == 400
    assert state.last_expression == expression[:511]


def test_ans_refers_to_previous_result():
    state = create_state()
    evaluate("3+4", state)
    assert evaluate("ans", state).value == 7
    assert evaluate("ANS * 2", state).value == 14
    assert evaluate("ans", state).value == 14


def test_memory_round_trip():
    state = create_state()
    memory_store(state, 5)
    assert evaluate("M", state).value == 5
    memory_add(state, 2)
    assert evaluate("mem", state).value == 7
    memory_subtract(state, 10)
    assert memory_recall(state) == -3
    memory_clear(state)
    assert memory_recall(state) == 0


def test_memory_operations_tolerate_missing_state():
    memory_store(None, 1)
    memory_add(None, 1)
    memory_subtract(None, 1)
    memory_clear(None)
    assert memory_recall(None) == 0.0


def test_same_expression_evaluates_the_same_twice():
    state = create_state()
    first = evaluate("sin(30) + sqrt(2) * ln(10)", state)
    second = evaluate("sin(30) + sqrt(2) * ln(10)", state)
    assert first.value == second.value


def test_reset_state():
    state = CalculatorState(memory=3, last_result=4, angle_unit=AngleUnit.RADIANS,
                            precision=4, last_expression="x")
    reset_state(state)
    assert state == create_state()
    reset_state(None)


def test_calculator_switches_angle_mode_per_call():
    calc = Calculator()
    assert calc.evaluate("sin(90)", degrees=True).value == pytest.approx(1)
    assert calc.evaluate("sin(90)", degrees=False).value == pytest.approx(0.8939966636)
    assert calc.angle_unit == AngleUnit.RADIANS
    assert calc.evaluate("cos(0)").value == 1


def test_calculator_history_is_most_recent_first():
    calc = Calculator()
    calc.evaluate("1+1")
    calc.evaluate("1/0")
    calc.evaluate("2*3")

    history = calc.recent_history()
    assert [entry.expression for entry in history] == ["2*3", "1+1"]
    assert [entry.result for entry in history] == [6, 2]

    calc.clear_history()
    assert calc.recent_history() == []


def test_calculator_history_is_bounded():
    calc = Calculator(history_limit=3)
    for i in range(5):
        calc.evaluate(str(i))
    assert [entry.expression for entry in calc.history] == ["4", "3", "2"]


def test_calculator_memory_keys():
    calc = Calculator()
    calc.evaluate("6*7")
    calc.memory_store(calc.last_result)
    assert calc.evaluate("M / 2").value == 21
    calc.memory_add(8)
    calc.memory_subtract(10)
    assert calc.memory_recall() == 40
    calc.memory_clear()
    assert calc.memory_recall() == 0


def test_integer_memory_value_formats():
    calc = Calculator()
    calc.memory_store(5)
    outcome = calc.evaluate("M")
    assert isinstance(outcome.value, float)
    assert calc.format(outcome) == "5"
    calc.memory_add(2)
    assert calc.format_value(calc.memory_recall()) == "7"


def test_calculator_formats_with_session_precision():
    calc = Calculator()
    calc.set_precision(4)
    assert calc.format(calc.evaluate("1/3")) == "0.3333"
    assert calc.format(calc.evaluate("1/0")) == "ERROR: Parse error"
    with pytest.raises(ValueError):
        calc.set_precision(-2)


def test_calculator_reset():
    calc = Calculator()
    calc.evaluate("5", degrees=False)
    calc.memory_store(9)
    calc.reset()
    assert calc.state == create_state()
    assert calc.recent_history() == []


def test_sessions_are_independent():
    first = Calculator()
    second = Calculator()
    first.memory_store(1)
    first.evaluate("10")
    assert second.memory_recall() == 0
    assert second.evaluate("ans").value == 0
