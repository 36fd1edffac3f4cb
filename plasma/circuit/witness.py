"""
Transaction → circuit witness projection.

Integer fields enter the circuit field directly. Amounts enter as their packed
float bit pattern read back as a little-endian integer (exponent in the low
bits, mantissa above it): that is what the circuit's float gadget receives,
*not* the decoded decimal value.

The fee is projected as zero until the transfer gadget constrains it, so fee
correctness does not reach the witness.

`TransferWitness.as_field_list()` is the frozen ordering shared with the circuit:

    from, to, amount, fee, nonce, good_until_block, sig R.x, sig R.y, sig s
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import List, Sequence

from plasma.config import DEFAULT_CONFIG, ProtocolConfig
from plasma.crypto import sigcodec
from plasma.crypto.field import FR_ZERO, Fr
from plasma.encoding import bits
from plasma.encoding.floatpack import Amount, FloatCodec
from plasma.models.tx import DepositTx, ExitTx, TransferTx


def to_field(value: int, subject: str = "value") -> Fr:
    """Checked injection of a plain integer into the circuit field."""
    return Fr.checked(value, subject)


def bits_to_field(le_bits: Sequence[bool]) -> Fr:
    """Little-endian bit vector → field element (must be below the modulus)."""
    return Fr.checked(bits.le_bits_to_int(le_bits), "bit vector")


def encoded_amount_field(value: Amount, codec: FloatCodec) -> Fr:
    return bits_to_field(codec.encode(value))


@dataclass(frozen=True)
class TransferWitness:
    from_: Fr
    to: Fr
    amount: Fr
    fee: Fr
    nonce: Fr
    good_until_block: Fr
    sig_r_x: Fr
    sig_r_y: Fr
    sig_s: Fr

    def as_field_list(self) -> List[Fr]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class DepositWitness:
    account: Fr
    amount: Fr
    pub_x: Fr
    pub_y: Fr

    def as_field_list(self) -> List[Fr]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class ExitWitness:
    account: Fr
    amount: Fr

    def as_field_list(self) -> List[Fr]:
        return [getattr(self, f.name) for f in fields(self)]


def transfer_witness(tx: TransferTx, config: ProtocolConfig = DEFAULT_CONFIG) -> TransferWitness:
    """
    Project a transfer into circuit form.

    Raises EncodingOverflow / AmountTooLarge for out-of-range fields and a
    SignatureError when the flat signature does not describe a curve signature.
    """
    widths = config.widths
    tx.validate(widths)
    # reject a malformed signature here rather than inside the prover
    r_x, r_y, s = sigcodec.to_flat(sigcodec.signature_from_tx(tx.signature, config.curve))
    return TransferWitness(
        from_=to_field(tx.from_, "from"),
        to=to_field(tx.to, "to"),
        amount=encoded_amount_field(tx.amount, widths.amount_codec()),
        fee=FR_ZERO,
        nonce=to_field(tx.nonce, "nonce"),
        good_until_block=to_field(tx.good_until_block, "good_until_block"),
        sig_r_x=to_field(r_x, "sig.r_x"),
        sig_r_y=to_field(r_y, "sig.r_y"),
        sig_s=to_field(s, "sig.s"),
    )


def deposit_witness(tx: DepositTx, config: ProtocolConfig = DEFAULT_CONFIG) -> DepositWitness:
    widths = config.widths
    bits.encode(tx.account, widths.account_index, "account")
    return DepositWitness(
        account=to_field(tx.account, "account"),
        amount=encoded_amount_field(tx.amount, widths.amount_codec()),
        pub_x=to_field(tx.pub_x, "pub_x"),
        pub_y=to_field(tx.pub_y, "pub_y"),
    )


def exit_witness(tx: ExitTx, config: ProtocolConfig = DEFAULT_CONFIG) -> ExitWitness:
    widths = config.widths
    bits.encode(tx.account, widths.account_index, "account")
    return ExitWitness(
        account=to_field(tx.account, "account"),
        amount=encoded_amount_field(tx.amount, widths.amount_codec()),
    )


__all__ = [
    "to_field",
    "bits_to_field",
    "encoded_amount_field",
    "TransferWitness",
    "DepositWitness",
    "ExitWitness",
    "transfer_witness",
    "deposit_witness",
    "exit_witness",
]
