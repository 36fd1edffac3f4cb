from decimal import Decimal

import pytest

from plasma.errors import EncodingOverflow, InvalidAmount
from plasma.models import DepositTx, ExitTx, TransferTx, TxSignature
from plasma.tests import make_transfer


def test_transfer_dict_round_trip():
    tx = make_transfer(signature=TxSignature(1, 2, 3))
    d = tx.to_dict()
    assert d["from"] == 7
    assert d["amount"] == "123456789"
    assert d["signature"] == {"r_x": "1", "r_y": "2", "s": "3"}
    assert TransferTx.from_dict(d) == tx


def test_from_dict_accepts_strings_and_hex():
    tx = TransferTx.from_dict(
        {
            "from": "7",
            "to": "0x2a",
            "amount": "1.5",
            "fee": 10,
            "nonce": 3,
            "good_until_block": "100000",
            "signature": {"r_x": "0x01", "r_y": 2, "s": "3"},
        }
    )
    assert tx.to == 42
    assert tx.amount == Decimal("1.5")
    assert tx.fee == Decimal(10)
    assert tx.signature == TxSignature(1, 2, 3)


@pytest.mark.parametrize("amount", [1.5, True, "abc"])
def test_inexact_amounts_are_refused(amount):
    d = make_transfer().to_dict()
    d["amount"] = amount
    with pytest.raises(InvalidAmount):
        TransferTx.from_dict(d)


def test_integer_fields_must_be_integers():
    d = make_transfer().to_dict()
    d["nonce"] = 1.0
    with pytest.raises(TypeError):
        TransferTx.from_dict(d)


def test_validate_checks_widths():
    assert make_transfer().validate() == make_transfer()
    with pytest.raises(EncodingOverflow):
        make_transfer(good_until_block=1 << 32).validate()


def test_deposit_and_exit_round_trip():
    dep = DepositTx(account=3, amount=Decimal("10.25"), pub_x=11, pub_y=12)
    assert DepositTx.from_dict(dep.to_dict()) == dep
    ex = ExitTx(account=3, amount=Decimal(99))
    assert ExitTx.from_dict(ex.to_dict()) == ex
