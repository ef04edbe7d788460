"""
End-to-end evaluation tests: the public `evaluate` contract.
"""

import pytest

from stepcalc import (
    CalculatorError,
    CalculatorEvaluator,
    EmptyResultError,
    ErrorKind,
    IllegalArithmeticError,
    IllegalOperatorError,
    MalformedNumberError,
    NonCompliantExpressionError,
    OperatorRegistry,
    Priority,
    Step,
    UnknownOperatorError,
    evaluate,
)


class TestEvaluateValues:

    @pytest.mark.parametrize("expression, expected", [
        ("2+3*4", 14.0),
        ("9?", 3.0),
        ("?9", 3.0),
        ("3+-5", -2.0),
        ("1.5*4", 6.0),
        ("7%3+1", 2.0),
        ("10/4", 2.5),
        ("-3", -3.0),
        ("--3", 3.0),
        ("42", 42.0),
        ("2 + 3 * 4 - 6 / 2", 11.0),
        ("?16*?4", 8.0),
        ("1-?4", -1.0),
    ])
    def test_value(self, expression, expected):
        assert evaluate(expression).value == pytest.approx(expected)

    def test_literal_only_has_no_steps(self):
        result = evaluate("42")
        assert result.steps == ()
        assert len(result.stages) == 1 + len(Priority)


class TestTrace:

    def test_show_your_work(self):
        result = evaluate("2+3*4")
        assert result.steps == (
            Step(3.0, 4.0, 12.0, "*"),
            Step(2.0, 12.0, 14.0, "+"),
        )

    def test_prefix_root_step_has_no_left_operand(self):
        assert evaluate("9?").steps == (Step(None, 9.0, 3.0, "?"),)

    def test_stage_labels(self):
        result = evaluate("1+1")
        assert [s.label for s in result.stages] == ["INIT", "HIGH", "MEDIUM", "LOW"]

    def test_init_stage_is_tokenizer_output(self):
        result = evaluate("3+-5")
        assert [t.text for t in result.stage("INIT").tokens] == ["3", "+", "-", "5"]

    def test_unknown_stage_label(self):
        with pytest.raises(KeyError):
            evaluate("1").stage("NOPE")

    @pytest.mark.parametrize("expression", [
        "1", "1+2", "1+2*3-4/5%6", "?" + "+".join(["1"] * 40),
    ])
    def test_pass_count_independent_of_length(self, expression):
        assert len(evaluate(expression).stages) == 1 + len(Priority)

    def test_deterministic(self):
        assert evaluate("1+?16*-2-3%2") == evaluate("1+?16*-2-3%2")

    def test_fresh_registry_gives_same_result(self):
        expression = "5*-2+?81/3"
        assert CalculatorEvaluator(expression, OperatorRegistry()).evaluate() == evaluate(expression)


class TestEvaluateFailures:

    @pytest.mark.parametrize("expression, error, kind", [
        ("1/0", IllegalArithmeticError, ErrorKind.ILLEGAL_ARITHMETIC),
        ("5%0", IllegalArithmeticError, ErrorKind.ILLEGAL_ARITHMETIC),
        ("?-4", IllegalArithmeticError, ErrorKind.ILLEGAL_ARITHMETIC),
        ("1/0*0+3", IllegalArithmeticError, ErrorKind.ILLEGAL_ARITHMETIC),
        ("3~4", UnknownOperatorError, ErrorKind.UNKNOWN_OPERATOR),
        ("1..2+3", MalformedNumberError, ErrorKind.MALFORMED_NUMBER),
        ("2**3", IllegalOperatorError, ErrorKind.ILLEGAL_OPERATOR),
        ("2+", NonCompliantExpressionError, ErrorKind.NON_COMPLIANT_EXPRESSION),
        ("9?2", NonCompliantExpressionError, ErrorKind.NON_COMPLIANT_EXPRESSION),
        ("", EmptyResultError, ErrorKind.EMPTY_RESULT),
    ])
    def test_failure_kind(self, expression, error, kind):
        with pytest.raises(error) as exc_info:
            evaluate(expression)
        assert exc_info.value.kind is kind
        assert isinstance(exc_info.value, CalculatorError)

    def test_illegal_arithmetic_message(self):
        with pytest.raises(CalculatorError) as exc_info:
            evaluate("1/0")
        assert "divide by 0" in str(exc_info.value)

    def test_malformed_number_message(self):
        with pytest.raises(MalformedNumberError, match=r"1\.\.2"):
            evaluate("1..2+3")

    def test_failure_envelope(self):
        with pytest.raises(CalculatorError) as exc_info:
            evaluate("3~4")
        assert exc_info.value.to_dict() == {
            "success": False,
            "kind": "unknown-operator",
            "message": "Unknown operator '~' in [1-1]",
        }

    def test_nan_check_can_be_skipped(self):
        result = CalculatorEvaluator("1/0").evaluate_with_reduce()
        assert result.value != result.value  # NaN
