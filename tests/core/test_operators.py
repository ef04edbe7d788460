"""
Operator table and registry tests.
"""

import math

import pytest

from stepcalc.core import OPERATOR_REGISTRY, Arity, Operator, OperatorRegistry, Priority


class TestPriority:

    def test_order_is_tightest_first(self):
        assert Priority.ordered() == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]

    def test_total_order(self):
        assert Priority.HIGH < Priority.MEDIUM < Priority.LOW
        assert sorted([Priority.LOW, Priority.HIGH, Priority.MEDIUM]) == Priority.ordered()


class TestBuiltinTable:

    def test_symbols(self):
        assert set(OPERATOR_REGISTRY.symbols()) == {"+", "-", "*", "/", "%", "?"}

    def test_shapes_and_priorities(self):
        assert OPERATOR_REGISTRY.get("?").arity is Arity.PREFIX
        assert OPERATOR_REGISTRY.get("?").priority is Priority.HIGH
        for symbol in "*/%":
            assert OPERATOR_REGISTRY.get(symbol).priority is Priority.MEDIUM
            assert OPERATOR_REGISTRY.get(symbol).arity is Arity.INFIX
        for symbol in "+-":
            assert OPERATOR_REGISTRY.get(symbol).priority is Priority.LOW

    def test_by_priority(self):
        assert {op.symbol for op in OPERATOR_REGISTRY.by_priority(Priority.MEDIUM)} == {"*", "/", "%"}

    @pytest.mark.parametrize("symbol, left, right, expected", [
        ("+", 2.0, 3.0, 5.0),
        ("-", 2.0, 3.0, -1.0),
        ("*", 2.5, 4.0, 10.0),
        ("/", 7.0, 2.0, 3.5),
        ("%", 7.0, 3.0, 1.0),
        ("%", -7.0, 3.0, -1.0),
        ("?", None, 16.0, 4.0),
    ])
    def test_apply(self, symbol, left, right, expected):
        assert OPERATOR_REGISTRY.get(symbol).apply(left, right) == pytest.approx(expected)

    def test_signs_without_left_operand(self):
        assert OPERATOR_REGISTRY.get("-").apply(None, 5.0) == -5.0
        assert OPERATOR_REGISTRY.get("+").apply(None, 5.0) == 5.0

    @pytest.mark.parametrize("symbol, left, right", [
        ("/", 1.0, 0.0),
        ("/", 0.0, 0.0),
        ("%", 5.0, 0.0),
        ("?", None, -4.0),
    ])
    def test_illegal_arithmetic_yields_nan(self, symbol, left, right):
        assert math.isnan(OPERATOR_REGISTRY.get(symbol).apply(left, right))

    def test_apply_returns_plain_float(self):
        assert type(OPERATOR_REGISTRY.get("*").apply(2.0, 3.0)) is float


class TestRegistry:

    def test_resolve_is_cached(self):
        registry = OperatorRegistry()
        assert registry.resolve("+") is registry.resolve("+")

    def test_fresh_registry_behaves_identically(self):
        fresh = OperatorRegistry()
        for symbol in OPERATOR_REGISTRY.symbols():
            assert fresh.get(symbol).apply(6.0, 3.0) == pytest.approx(
                OPERATOR_REGISTRY.get(symbol).apply(6.0, 3.0)
            )

    def test_unknown_symbol(self):
        assert OPERATOR_REGISTRY.resolve("~") is None
        assert OPERATOR_REGISTRY.resolve("") is None
        assert OPERATOR_REGISTRY.resolve(None) is None
        with pytest.raises(KeyError):
            OPERATOR_REGISTRY.get("~")

    def test_membership(self):
        assert OPERATOR_REGISTRY.is_valid_symbol("%")
        assert not OPERATOR_REGISTRY.is_valid_symbol("^")
        assert "?" in OPERATOR_REGISTRY
        assert len(OPERATOR_REGISTRY) == 6

    def test_self_compounding(self):
        assert OPERATOR_REGISTRY.is_self_compounding("+")
        assert OPERATOR_REGISTRY.is_self_compounding("-")
        for symbol in ("*", "/", "%", "?", "~"):
            assert not OPERATOR_REGISTRY.is_self_compounding(symbol)

    def test_default_registry_is_frozen(self):
        assert OPERATOR_REGISTRY.is_frozen()
        with pytest.raises(RuntimeError):
            OPERATOR_REGISTRY.register(
                Operator("^", Arity.INFIX, Priority.HIGH, lambda l, r: l ** r)
            )

    def test_duplicate_symbol_rejected(self):
        registry = OperatorRegistry(freeze=False)
        with pytest.raises(ValueError):
            registry.register(
                Operator("+", Arity.INFIX, Priority.LOW, lambda l, r: l + r)
            )

    def test_only_sign_symbols_may_self_compound(self):
        registry = OperatorRegistry(freeze=False)
        with pytest.raises(ValueError):
            registry.register(
                Operator("^", Arity.INFIX, Priority.HIGH, lambda l, r: l ** r,
                         self_compounding=True)
            )
