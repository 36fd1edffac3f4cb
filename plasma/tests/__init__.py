"""
plasma.tests helpers

Lightweight utilities shared by plasma/* tests.

Exports:
- env_flag(name, default=False) -> bool
- configure_test_logging() -> None
- key(seed) -> PrivateKey                (deterministic reference keys)
- make_transfer(**fields) -> TransferTx  (unsigned unless `signature` given)
- sign_transfer(tx, key, widths) -> TransferTx
- toy_curve(p) -> CurveParams            (small twisted Edwards curve, brute-forced)

Environment toggles:
- PLASMA_TEST_LOG=1 → enable DEBUG logging for plasma.*
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from decimal import Decimal
from functools import lru_cache
from typing import Any

from plasma.config import DEFAULT_CONFIG, BitWidths
from plasma.crypto import sigcodec
from plasma.crypto.eddsa import PrivateKey
from plasma.crypto.field import inv_mod, legendre, sqrt_mod
from plasma.crypto.jubjub import CurveParams, Point
from plasma.models.tx import TransferTx, TxSignature

ZERO_SIG = TxSignature(r_x=0, r_y=0, s=0)


def env_flag(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def configure_test_logging(level: int | None = None) -> None:
    """Configure basic logging for plasma.* loggers when PLASMA_TEST_LOG is set."""
    if level is None:
        level = logging.DEBUG
    if env_flag("PLASMA_TEST_LOG", False):
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        logging.getLogger("plasma").setLevel(level)


@lru_cache(maxsize=None)
def key(seed: bytes = b"alice") -> PrivateKey:
    return PrivateKey.from_seed(seed)


def make_transfer(**fields: Any) -> TransferTx:
    base = dict(
        from_=7,
        to=42,
        amount=Decimal("123456789"),
        fee=Decimal("1000"),
        nonce=3,
        good_until_block=100_000,
        signature=ZERO_SIG,
    )
    base.update(fields)
    return TransferTx(**base)


def sign_transfer(tx: TransferTx, signer: PrivateKey, widths: BitWidths = DEFAULT_CONFIG.widths) -> TransferTx:
    signature = signer.sign(tx.message_bytes(widths))
    return replace(tx, signature=sigcodec.signature_to_tx(signature))


def _largest_prime_factor(n: int) -> int:
    f, last = 2, 1
    while f * f <= n:
        while n % f == 0:
            last, n = f, n // f
        f += 1
    return n if n > 1 else last


@lru_cache(maxsize=None)
def toy_curve(p: int = 1009) -> CurveParams:
    """
    Smallest complete twisted Edwards curve (a = 1, d the first non-residue)
    over F_p, with a base point generating its largest prime-order subgroup.
    """
    a = 1
    d = next(c for c in range(2, p) if legendre(c, p) == -1)
    points = []
    for x in range(p):
        # y^2 = (1 - a x^2) / (1 - d x^2); the denominator never vanishes for non-square d
        y = sqrt_mod((1 - a * x * x) * inv_mod(1 - d * x * x, p), p)
        if y is not None:
            points.extend({Point(x, y), Point(x, (p - y) % p)})
    n = len(points)
    order = _largest_prime_factor(n)
    cofactor = n // order
    probe = CurveParams(name="probe", p=p, a=a, d=d, order=order, cofactor=cofactor, base=Point(0, 1))
    for pt in points:
        base = probe.mul(pt, cofactor)
        if not probe.is_identity(base):
            return replace(probe, name=f"toy{p}", base=base).validate()
    raise AssertionError("no generator found")


configure_test_logging()

__all__ = [
    "ZERO_SIG",
    "env_flag",
    "configure_test_logging",
    "key",
    "make_transfer",
    "sign_transfer",
    "toy_curve",
]
