from decimal import Decimal

import pytest

from plasma.config import BitWidths
from plasma.encoding import bits
from plasma.encoding.message import message_bit_length, transfer_message_bits, transfer_message_bytes
from plasma.errors import AmountTooLarge, EncodingOverflow
from plasma.models.tx import TransferTx
from plasma.tests import make_transfer


def _zero_transfer(**fields):
    base = dict(from_=0, to=0, amount=Decimal(0), fee=Decimal(0), nonce=0, good_until_block=0)
    base.update(fields)
    return make_transfer(**base)


def test_default_layout_is_152_bits():
    assert message_bit_length() == 152
    tx = make_transfer()
    assert len(transfer_message_bits(tx)) == 152
    assert len(transfer_message_bytes(tx)) == 19


def test_account_fields_lead_the_message():
    msg = transfer_message_bytes(_zero_transfer(from_=1, to=2))
    assert msg == bytes([0x80, 0x00, 0x00, 0x40]) + bytes(15)


def test_nonce_and_block_offsets():
    assert transfer_message_bytes(_zero_transfer(nonce=1)) == bytes(11) + b"\x80" + bytes(7)
    assert transfer_message_bytes(_zero_transfer(good_until_block=1)) == bytes(15) + b"\x80" + bytes(3)


def test_field_slices_decode_back():
    tx = make_transfer()
    w = BitWidths()
    m = transfer_message_bits(tx)
    assert bits.decode(m[0:24]) == tx.from_
    assert bits.decode(m[24:48]) == tx.to
    amount = w.amount_codec().decode(m[48:72])
    assert amount == Decimal(123_456_000)
    assert w.fee_codec().decode(m[72:88]) == Decimal(1000)
    assert bits.decode(m[88:120]) == tx.nonce
    assert bits.decode(m[120:152]) == tx.good_until_block


def test_message_round_trips_through_bytes():
    m = transfer_message_bits(make_transfer())
    packed = bits.pack_bits_into_bytes(m)
    assert bits.unpack_bytes_into_bits(packed, len(m)) == m


def test_partial_last_byte_is_padded_low():
    widths = BitWidths(
        account_index=2,
        amount_exponent=1,
        amount_mantissa=2,
        fee_exponent=1,
        fee_mantissa=2,
        nonce=3,
        block_number=4,
    )
    assert message_bit_length(widths) == 17
    msg = transfer_message_bytes(_zero_transfer(good_until_block=8), widths)
    assert msg == b"\x00\x00\x80"


def test_equal_fields_give_equal_messages():
    a = make_transfer(amount=Decimal("123456789"))
    b = make_transfer(amount=Decimal("123456000.5"))
    # both truncate to the same packed amount
    assert transfer_message_bytes(a) == transfer_message_bytes(b)
    assert transfer_message_bytes(a) != transfer_message_bytes(make_transfer(nonce=4))


@pytest.mark.parametrize(
    "fields",
    [
        {"from_": 1 << 24},
        {"to": 1 << 24},
        {"nonce": 1 << 32},
        {"good_until_block": -1},
    ],
)
def test_out_of_range_fields_fail(fields):
    with pytest.raises(EncodingOverflow):
        transfer_message_bytes(_zero_transfer(**fields))


def test_unrepresentable_amount_fails():
    with pytest.raises(AmountTooLarge):
        transfer_message_bytes(_zero_transfer(amount=Decimal(10) ** 40))


def test_model_helpers_match_module_functions():
    tx = make_transfer()
    assert tx.message_bits() == transfer_message_bits(tx)
    assert tx.message_bytes() == transfer_message_bytes(tx)


def test_deserialized_huge_amount_fails_fast():
    d = make_transfer().to_dict()
    d["amount"] = "1E+999999999"
    tx = TransferTx.from_dict(d)
    with pytest.raises(AmountTooLarge):
        transfer_message_bytes(tx)
