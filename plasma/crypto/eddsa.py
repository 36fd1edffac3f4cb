"""
EdDSA over the embedded twisted Edwards curve.

Verification
------------
For a signature (R, s) on message M under public key A:

    c = BLAKE2b-512(person)(enc(R) || enc(A) || M)  mod l
    accept  iff  [h]·(s·B) == [h]·(R + c·A)

where B is the curve's spending-key base point, l the prime subgroup order and
h the cofactor. Multiplying both sides by h clears any low-order component an
attacker could smuggle into R; a public key that is itself of small order
([h]·A == O) is rejected outright.

`verify` never raises on a well-formed but wrong signature. Points that are not
on the curve or out-of-range scalars are the business of
`plasma.crypto.sigcodec`, which rejects them before a `CurveSignature` exists.

Signing
-------
`PrivateKey` is a deterministic reference signer (nonce derived from the key
and the message), used by tests and the CLI. It is not constant-time.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from typing import Optional

from plasma.crypto.jubjub import BABYJUBJUB, CurveParams, Point
from plasma.crypto.sigcodec import CurveSignature
from plasma.logging import get_logger

log = get_logger(__name__)

# Byte length of the BLAKE2b personalization binding challenges to this
# protocol (the maximum BLAKE2b allows).
SECURITY_PARAM = 16


def _h_star(curve: CurveParams, *chunks: bytes) -> int:
    h = hashlib.blake2b(digest_size=64, person=curve.personalization)
    for chunk in chunks:
        h.update(chunk)
    return int.from_bytes(h.digest(), "little")


def challenge(curve: CurveParams, r: Point, public_key: Point, message: bytes) -> int:
    """Fiat–Shamir challenge scalar in [0, l)."""
    return _h_star(curve, curve.encode(r), curve.encode(public_key), message) % curve.order


def verify(
    message: bytes,
    signature: CurveSignature,
    public_key: Point,
    curve: CurveParams = BABYJUBJUB,
    *,
    security_param: int = SECURITY_PARAM,
) -> bool:
    """
    Check `signature` over `message` against `public_key`.

    Returns False for any cryptographically invalid signature, including a
    public key that is off-curve or of small order.
    """
    if len(curve.personalization) != security_param:
        log.warning(
            "challenge personalization does not match the security parameter",
            extra={"curve": curve.name, "security_param": security_param},
        )
        return False
    if not curve.is_on_curve(public_key.x, public_key.y):
        log.warning("public key is not on the curve", extra={"curve": curve.name})
        return False
    if curve.is_identity(curve.mul_by_cofactor(public_key)):
        log.warning("public key has small order", extra={"curve": curve.name})
        return False

    c = challenge(curve, signature.r, public_key, bytes(message))
    lhs = curve.mul_by_cofactor(curve.mul_base(signature.s))
    rhs = curve.mul_by_cofactor(curve.add(signature.r, curve.mul(public_key, c)))
    ok = lhs == rhs
    if not ok:
        log.debug("signature rejected", extra={"curve": curve.name, "msg_len": len(message)})
    return ok


@dataclass(frozen=True)
class PrivateKey:
    """Secret scalar in [1, l) bound to a curve."""

    scalar: int
    curve: CurveParams = BABYJUBJUB

    def __post_init__(self) -> None:
        if not 0 < self.scalar < self.curve.order:
            raise ValueError("private scalar must be in [1, l)")

    def __repr__(self) -> str:
        return f"PrivateKey(curve={self.curve.name!r}, scalar=<hidden>)"

    @classmethod
    def from_seed(cls, seed: bytes, curve: CurveParams = BABYJUBJUB) -> "PrivateKey":
        """Derive a key from arbitrary seed bytes (deterministic)."""
        scalar = _h_star(curve, b"plasma/keygen", bytes(seed)) % curve.order
        return cls(scalar or 1, curve)

    @classmethod
    def generate(cls, curve: CurveParams = BABYJUBJUB) -> "PrivateKey":
        return cls.from_seed(secrets.token_bytes(32), curve)

    def _scalar_bytes(self) -> bytes:
        return self.scalar.to_bytes(self.curve.byte_len, "little")

    def public_key(self) -> Point:
        return self.curve.mul_base(self.scalar)

    def sign(self, message: bytes, nonce_seed: Optional[bytes] = None) -> CurveSignature:
        """
        Deterministic signature. `nonce_seed` adds extra entropy to the nonce
        derivation without changing the verification equation.
        """
        curve = self.curve
        r = _h_star(curve, b"plasma/nonce", self._scalar_bytes(), nonce_seed or b"", bytes(message)) % curve.order
        if r == 0:
            r = 1
        big_r = curve.mul_base(r)
        c = challenge(curve, big_r, self.public_key(), bytes(message))
        s = (r + c * self.scalar) % curve.order
        return CurveSignature(r=big_r, s=s)


__all__ = [
    "SECURITY_PARAM",
    "challenge",
    "verify",
    "PrivateKey",
]
