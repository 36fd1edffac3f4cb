"""
plasma: transaction encoding & signature core of a rollup settlement node.

Produces the canonical bit layout of transfer/deposit/exit requests, the
circuit witness projection of those requests, and verifies EdDSA signatures on
the embedded Baby Jubjub curve. Everything here is a pure function of its
inputs and an immutable `ProtocolConfig`; the request layer, storage and the
prover live elsewhere.

Typical use
-----------
>>> from plasma import load_config, TransferTx
>>> cfg = load_config()
>>> tx = TransferTx.from_dict(payload)
>>> ok = tx.verify_signature(sender_public_key, cfg)
>>> witness = transfer_witness(tx, cfg)
"""

from __future__ import annotations

from plasma.circuit.witness import deposit_witness, exit_witness, transfer_witness
from plasma.config import DEFAULT_CONFIG, BitWidths, ProtocolConfig
from plasma.config import load as load_config
from plasma.crypto.eddsa import PrivateKey, verify
from plasma.crypto.jubjub import BABYJUBJUB, CurveParams, Point
from plasma.crypto.sigcodec import CurveSignature, from_flat, to_flat
from plasma.encoding.floatpack import FloatCodec
from plasma.encoding.message import transfer_message_bits, transfer_message_bytes
from plasma.errors import (
    AmountTooLarge,
    EncodingOverflow,
    InvalidAmount,
    InvalidScalar,
    InvalidSignaturePoint,
    PlasmaError,
)
from plasma.fees import batch_fee_total, closest_packable_fee
from plasma.models.tx import DepositTx, ExitTx, TransferTx, TxSignature
from plasma.version import __version__

__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "BitWidths",
    "ProtocolConfig",
    "load_config",
    "BABYJUBJUB",
    "CurveParams",
    "Point",
    "CurveSignature",
    "from_flat",
    "to_flat",
    "PrivateKey",
    "verify",
    "FloatCodec",
    "transfer_message_bits",
    "transfer_message_bytes",
    "transfer_witness",
    "deposit_witness",
    "exit_witness",
    "batch_fee_total",
    "closest_packable_fee",
    "TxSignature",
    "TransferTx",
    "DepositTx",
    "ExitTx",
    "PlasmaError",
    "EncodingOverflow",
    "AmountTooLarge",
    "InvalidAmount",
    "InvalidSignaturePoint",
    "InvalidScalar",
]
