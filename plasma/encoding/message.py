"""
Canonical transfer message.

Field order and widths (bits, LSB first per field):

    from              account_index
    to                account_index
    amount            amount_exponent + amount_mantissa   (float packed)
    fee               fee_exponent + fee_mantissa         (float packed)
    nonce             nonce
    good_until_block  block_number

The concatenation is packed MSB-first into bytes. This layout is shared with
the circuit and must only change together with it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plasma.config import DEFAULT_CONFIG, BitWidths
from plasma.encoding import bits

if TYPE_CHECKING:  # pragma: no cover
    from plasma.models.tx import TransferTx


def transfer_message_bits(tx: "TransferTx", widths: BitWidths = DEFAULT_CONFIG.widths) -> bits.Bits:
    r: bits.Bits = []
    r.extend(bits.encode(tx.from_, widths.account_index, "from"))
    r.extend(bits.encode(tx.to, widths.account_index, "to"))
    r.extend(widths.amount_codec().encode(tx.amount))
    r.extend(widths.fee_codec().encode(tx.fee))
    r.extend(bits.encode(tx.nonce, widths.nonce, "nonce"))
    r.extend(bits.encode(tx.good_until_block, widths.block_number, "good_until_block"))
    return r


def transfer_message_bytes(tx: "TransferTx", widths: BitWidths = DEFAULT_CONFIG.widths) -> bytes:
    return bits.pack_bits_into_bytes(transfer_message_bits(tx, widths))


def message_bit_length(widths: BitWidths = DEFAULT_CONFIG.widths) -> int:
    return widths.transfer_message_bits


__all__ = ["transfer_message_bits", "transfer_message_bytes", "message_bit_length"]
