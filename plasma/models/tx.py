"""
Transaction models.

These are the already-deserialized objects the request layer hands to the core.
They are immutable; amounts are exact decimals, signature components and public
key coordinates are circuit-field integers.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Mapping

from plasma.config import DEFAULT_CONFIG, BitWidths, ProtocolConfig
from plasma.encoding import bits
from plasma.errors import InvalidAmount

if TYPE_CHECKING:  # pragma: no cover
    from plasma.crypto.jubjub import Point


def _decimal(value: Any, subject: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmount(value, f"{subject} must be an exact decimal")
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmount(value, f"{subject} is not a decimal").with_cause(e) from e


def _int(value: Any, subject: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{subject} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        return int(s, 16) if s.lower().startswith("0x") else int(s, 10)
    raise TypeError(f"{subject} must be an integer, got {type(value).__name__}")


@dataclass(frozen=True)
class TxSignature:
    """Flat signature: R's affine coordinates and the scalar s."""

    r_x: int
    r_y: int
    s: int

    def to_dict(self) -> Dict[str, str]:
        return {"r_x": str(self.r_x), "r_y": str(self.r_y), "s": str(self.s)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TxSignature":
        return cls(r_x=_int(d["r_x"], "r_x"), r_y=_int(d["r_y"], "r_y"), s=_int(d["s"], "s"))


@dataclass(frozen=True)
class TransferTx:
    from_: int
    to: int
    amount: Decimal
    fee: Decimal
    nonce: int
    good_until_block: int
    signature: TxSignature

    def validate(self, widths: BitWidths = DEFAULT_CONFIG.widths) -> "TransferTx":
        """Range-check the integer fields against their widths."""
        bits.encode(self.from_, widths.account_index, "from")
        bits.encode(self.to, widths.account_index, "to")
        bits.encode(self.nonce, widths.nonce, "nonce")
        bits.encode(self.good_until_block, widths.block_number, "good_until_block")
        return self

    def message_bits(self, widths: BitWidths = DEFAULT_CONFIG.widths) -> bits.Bits:
        from plasma.encoding.message import transfer_message_bits

        return transfer_message_bits(self, widths)

    def message_bytes(self, widths: BitWidths = DEFAULT_CONFIG.widths) -> bytes:
        from plasma.encoding.message import transfer_message_bytes

        return transfer_message_bytes(self, widths)

    def verify_signature(self, public_key: "Point", config: ProtocolConfig = DEFAULT_CONFIG) -> bool:
        """
        Rebuild the signed message and check the attached signature.

        Malformed signature material raises a SignatureError; a well-formed
        but wrong signature returns False.
        """
        from plasma.crypto import eddsa, sigcodec

        signature = sigcodec.signature_from_tx(self.signature, config.curve)
        return eddsa.verify(
            self.message_bytes(config.widths),
            signature,
            public_key,
            config.curve,
            security_param=config.signature_security_param,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_,
            "to": self.to,
            "amount": str(self.amount),
            "fee": str(self.fee),
            "nonce": self.nonce,
            "good_until_block": self.good_until_block,
            "signature": self.signature.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TransferTx":
        return cls(
            from_=_int(d["from"], "from"),
            to=_int(d["to"], "to"),
            amount=_decimal(d["amount"], "amount"),
            fee=_decimal(d["fee"], "fee"),
            nonce=_int(d["nonce"], "nonce"),
            good_until_block=_int(d["good_until_block"], "good_until_block"),
            signature=TxSignature.from_dict(d["signature"]),
        )


@dataclass(frozen=True)
class DepositTx:
    """Observed on-chain deposit; trusted via the L1 event, so unsigned."""

    account: int
    amount: Decimal
    pub_x: int
    pub_y: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account": self.account,
            "amount": str(self.amount),
            "pub_x": str(self.pub_x),
            "pub_y": str(self.pub_y),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "DepositTx":
        return cls(
            account=_int(d["account"], "account"),
            amount=_decimal(d["amount"], "amount"),
            pub_x=_int(d["pub_x"], "pub_x"),
            pub_y=_int(d["pub_y"], "pub_y"),
        )


@dataclass(frozen=True)
class ExitTx:
    account: int
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"account": self.account, "amount": str(self.amount)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ExitTx":
        return cls(account=_int(d["account"], "account"), amount=_decimal(d["amount"], "amount"))


__all__ = ["TxSignature", "TransferTx", "DepositTx", "ExitTx"]
