import pytest

from symunits.core.expression import Literal, Symbol
from symunits.core.units import DimensionMismatchError, Units
from symunits.units.labels import UnitLabel, UnitNamespace
from symunits import u


def test_attribute_gives_symbol_label():
    assert u.m == UnitLabel(Symbol("m"))
    assert str(u.furlong) == "furlong"


def test_private_names_raise():
    with pytest.raises(AttributeError):
        _ = UnitNamespace()._secret


def test_value_times_label_builds_units():
    q = 3 * u.m
    assert isinstance(q, Units)
    assert q == Units(3, "m")


def test_compound_labels():
    accel = u.m / u.s**2
    assert accel.dimension == Symbol("m") / Symbol("s") ** Literal(2)
    q = 9.8 * accel
    assert f"{q:pretty}" == "9.8 m/s²"
    assert str(u.kg * u.m) == "kg*m"


def test_parsed_label_matches_operator_label():
    assert u.unit("m/s**2") == u.m / u.s**2
    assert u.unit("kg*m") == u.kg * u.m


def test_labels_feed_dimension_checks():
    total = 2.0 * u.m + 3.0 * u.m
    assert total.value == pytest.approx(5.0)
    with pytest.raises(DimensionMismatchError):
        _ = 2.0 * u.m + 3.0 * u.s


def test_label_rejects_non_label_operands():
    with pytest.raises(TypeError):
        _ = u.m * "s"
    with pytest.raises(TypeError):
        _ = u.m / 2


def test_expression_times_label_builds_units():
    x = Symbol("x")
    q = x * u.m
    assert isinstance(q, Units)
    assert q == Units(Symbol("x"), "m")
    assert str(q) == "x_m"


def test_expression_and_units_do_not_mix():
    with pytest.raises(TypeError):
        _ = Literal(2) * Units(3, "m")
    with pytest.raises(TypeError):
        _ = Units(3, "m") + Symbol("x")
    with pytest.raises(TypeError):
        _ = u.m * Symbol("x")
    with pytest.raises(TypeError):
        _ = Symbol("x") / u.s
