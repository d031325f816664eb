import math

import pytest

from vanpoint.mapping import (
    AxisMapping,
    MappingKind,
    distance_to_ratio,
    ratio_to_distance,
    singularity,
)


@pytest.mark.parametrize("kind", [MappingKind.RATIONAL, MappingKind.EXPONENTIAL])
@pytest.mark.parametrize("factor", [0.01, 0.125, 0.25, 1.0, 7.5])
def test_zero_maps_to_zero(kind, factor):
    assert distance_to_ratio(0, factor, kind) == 0.0
    assert distance_to_ratio(0.0, factor, kind) == 0.0


def test_rational_value():
    assert distance_to_ratio(1, 0.25) == pytest.approx(0.2)
    assert distance_to_ratio(4, 0.25) == pytest.approx(0.5)


def test_rational_monotone_convergence():
    samples = [-3.9, -3.0, -1.0, -0.5, 0.0, 0.5, 1.0, 10.0, 100.0, 1e4, 1e6]
    ratios = [distance_to_ratio(s, 0.25) for s in samples]
    assert all(a < b for a, b in zip(ratios, ratios[1:]))
    assert all(r < 1.0 for r in ratios)
    assert ratios[-1] == pytest.approx(1.0, abs=1e-5)


def test_rational_singularity():
    assert singularity(0.25) == -4.0
    assert distance_to_ratio(-4, 0.25) == -math.inf
    ## past the singularity the formula wraps around above 1
    assert distance_to_ratio(-8, 0.25) == pytest.approx(2.0)


def test_exponential_values():
    assert distance_to_ratio(1, 0.25, MappingKind.EXPONENTIAL) == pytest.approx(0.2)
    assert distance_to_ratio(1, 0.25, MappingKind.EXPONENTIAL, base=2.0) == 0.5
    assert distance_to_ratio(3, 0.25, MappingKind.EXPONENTIAL, base=2.0) == 0.875
    assert distance_to_ratio(-1e6, 0.25, MappingKind.EXPONENTIAL) == -math.inf
    assert singularity(0.25, MappingKind.EXPONENTIAL) == -math.inf


def test_exponential_integer_base():
    assert distance_to_ratio(3, 0.25, MappingKind.EXPONENTIAL, base=2) == 0.875
    ## an int base must not turn into an exact big-integer power
    r = distance_to_ratio(-10 ** 7, 0.25, MappingKind.EXPONENTIAL, base=2)
    assert r == -math.inf
    assert isinstance(AxisMapping(0.25, MappingKind.EXPONENTIAL, 2).ratio(2), float)


def test_exponential_is_not_rational():
    r = distance_to_ratio(10, 0.25)
    e = distance_to_ratio(10, 0.25, MappingKind.EXPONENTIAL)
    assert 0 < r < 1 and 0 < e < 1
    assert not math.isclose(r, e)


@pytest.mark.parametrize("kind", [MappingKind.RATIONAL, MappingKind.EXPONENTIAL])
@pytest.mark.parametrize("s", [-3.0, -0.75, 0.5, 2.0, 17.0])
def test_ratio_to_distance_inverts(kind, s):
    r = distance_to_ratio(s, 0.25, kind)
    assert ratio_to_distance(r, 0.25, kind) == pytest.approx(s)


def test_ratio_at_vanishing_point():
    assert ratio_to_distance(1.0, 0.25) == math.inf
    assert ratio_to_distance(1.5, 0.25, MappingKind.EXPONENTIAL) == math.inf


def test_kind_parse():
    assert MappingKind.parse("Rational") is MappingKind.RATIONAL
    assert MappingKind.parse("exponential") is MappingKind.EXPONENTIAL
    assert MappingKind.parse(MappingKind.RATIONAL) is MappingKind.RATIONAL
    with pytest.raises(ValueError):
        MappingKind.parse("hyperbolic")
    assert distance_to_ratio(1, 0.25, "exponential", 2.0) == 0.5


class TestAxisMapping:
    def test_ratio_and_distance(self):
        m = AxisMapping(0.25)
        assert m.kind is MappingKind.RATIONAL
        assert m.ratio(1) == distance_to_ratio(1, 0.25)
        assert m.distance(m.ratio(3.0)) == pytest.approx(3.0)

    def test_kind_coerced(self):
        m = AxisMapping(0.5, "exponential", 3.0)
        assert m.kind is MappingKind.EXPONENTIAL
        assert m.ratio(1) == pytest.approx(2.0 / 3.0)

    def test_domain(self):
        m = AxisMapping(0.25)
        assert m.lower_bound == -4.0
        assert m.contains(-3.999)
        assert not m.contains(-4.0)
        assert not m.contains(-10.0)
        assert AxisMapping(0.25, MappingKind.EXPONENTIAL).contains(-1e9)

    def test_frozen(self):
        m = AxisMapping(0.25)
        with pytest.raises(AttributeError):
            m.factor = 1.0
