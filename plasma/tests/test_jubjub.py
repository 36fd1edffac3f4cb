import pytest

from plasma.crypto.field import R
from plasma.crypto.jubjub import BABYJUBJUB, CurveParams, Point, get_curve
from plasma.errors import ConfigError
from plasma.tests import toy_curve

B = BABYJUBJUB


def test_babyjubjub_parameters_are_consistent():
    assert B.p == R
    assert B.is_on_curve(*B.base.xy())
    assert B.validate() is B
    assert B.is_identity(B.mul(B.base, B.order))


def test_off_curve_and_non_canonical_coordinates():
    assert not B.is_on_curve(1, 1)
    assert B.from_xy(1, 1) is None
    assert B.from_xy(B.base.x + B.p, B.base.y) is None
    assert B.from_xy(B.base.x, B.base.y) == B.base


def test_small_order_points():
    two_torsion = Point(0, B.p - 1)
    assert B.is_on_curve(*two_torsion.xy())
    assert B.is_identity(B.double(two_torsion))
    assert B.is_identity(B.mul_by_cofactor(two_torsion))
    assert not B.in_subgroup(two_torsion)


def test_group_law_on_babyjubjub():
    p2 = B.double(B.base)
    p3 = B.add(p2, B.base)
    assert B.mul_base(3) == p3
    assert B.add(B.base, B.negate(B.base)) == B.identity
    assert B.mul(B.base, -2) == B.negate(p2)
    assert B.mul_base(B.order + 5) == B.mul_base(5)
    assert B.in_subgroup(p3)


def test_point_compression_round_trip():
    for k in (1, 2, 7, 123456789, B.order - 1):
        pt = B.mul_base(k)
        enc = B.encode(pt)
        assert len(enc) == 32
        assert B.decode(enc) == pt
    assert B.decode(b"\x00" * 31) is None


def test_compression_sign_bit_distinguishes_negation():
    pt = B.mul_base(11)
    neg = B.negate(pt)
    assert B.encode(pt) != B.encode(neg)
    assert B.encode(pt)[:-1] == B.encode(neg)[:-1]
    assert B.decode(B.encode(neg)) == neg


def test_get_curve():
    assert get_curve("BabyJubjub") is BABYJUBJUB
    with pytest.raises(ConfigError):
        get_curve("ed25519")


@pytest.mark.parametrize(
    "changes",
    [
        {"p": 1000},
        {"d": 168700},
        {"personalization": b"short"},
        {"base": Point(1, 1)},
        {"order": 7},
    ],
)
def test_validate_rejects_broken_parameter_sets(changes):
    fields = dict(
        name="broken",
        p=B.p,
        a=B.a,
        d=B.d,
        order=B.order,
        cofactor=B.cofactor,
        base=B.base,
        personalization=B.personalization,
    )
    fields.update(changes)
    with pytest.raises(ConfigError):
        CurveParams(**fields).validate()


def test_toy_curve_group_law():
    c = toy_curve()
    assert c.is_complete
    assert c.is_on_curve(*c.base.xy())
    assert c.is_identity(c.mul_base(c.order))
    for k in range(1, c.order):
        pt = c.mul_base(k)
        assert not c.is_identity(pt)
        assert c.add(pt, c.mul_base(c.order - k)) == c.identity
        assert c.decode(c.encode(pt)) == pt
    a, b = c.mul_base(3), c.mul_base(5)
    assert c.add(a, b) == c.add(b, a) == c.mul_base(8)
