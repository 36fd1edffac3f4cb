from decimal import Decimal

import pytest

from plasma.config import BitWidths
from plasma.errors import AmountTooLarge, InvalidAmount
from plasma.fees import batch_fee_total, closest_packable_amount, closest_packable_fee, is_packable_fee


def test_closest_packable_fee():
    assert closest_packable_fee(1023) == Decimal(1023)
    assert closest_packable_fee(1024) == Decimal(1020)
    assert closest_packable_fee(Decimal("10231.9")) == Decimal(10230)
    assert closest_packable_amount(123_456_789) == Decimal(123_456_000)


def test_sum_of_packable_fees_is_renormalized():
    assert is_packable_fee(10_230) and is_packable_fee(1)
    assert not is_packable_fee(10_231)
    total = batch_fee_total([10_230, 1])
    assert total == Decimal(10_230)
    assert is_packable_fee(total)


def test_batch_total_never_exceeds_naive_sum():
    fees = [Decimal("999.9"), 1500, 77, Decimal("123456"), 0]
    total = batch_fee_total(fees)
    assert total <= sum(Decimal(f) for f in fees)
    assert is_packable_fee(total)
    assert batch_fee_total([]) == Decimal(0)


def test_batch_total_respects_configured_widths():
    small = BitWidths(fee_exponent=1, fee_mantissa=4)
    # only exponents 0 and 1 are available: the largest packable fee is 150
    assert batch_fee_total([15, 15], small) == Decimal(30)
    assert batch_fee_total([150], small) == Decimal(150)
    with pytest.raises(AmountTooLarge):
        batch_fee_total([150, 150], small)


def test_invalid_fee():
    with pytest.raises(InvalidAmount):
        batch_fee_total([Decimal(-1)])
