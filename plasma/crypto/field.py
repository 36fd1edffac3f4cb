"""
Prime-field helpers: minimal, pure-Python.

Provides:
- `Fr`: immutable element of the BN254 scalar field, the native field of the
  proving circuit (and the base field of the embedded Baby Jubjub curve).
  The modulus is taken from `py_ecc` so it is the same constant the rest of the
  BN254 tooling uses.
- Modular helpers over an arbitrary prime (`inv_mod`, `legendre`, `sqrt_mod`)
  used by the curve arithmetic, which is parametrised by its own modulus so
  alternate (small) curves can be plugged in for tests.

It is **not** constant-time. Signing helpers built on it are reference
tooling, not a wallet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from py_ecc.bn128 import curve_order as _BN254_R

from plasma.errors import FieldOverflow

# BN254 scalar field prime (r):
#   21888242871839275222246405745257275088548364400416034343698204186575808495617
R: int = int(_BN254_R)
FR_BYTE_LEN = 32


def _to_int(x: Union[int, "Fr"]) -> int:
    return x.n if isinstance(x, Fr) else int(x)


@dataclass(frozen=True)
class Fr:
    """
    Element of F_r in canonical form.

    Arithmetic wraps modulo R; use `Fr.checked` for inputs that must already be
    canonical (anything coming from outside the process).
    """

    n: int  # canonical representative in [0, R)

    # --- Constructors -----------------------------------------------------

    @staticmethod
    def from_int(x: int) -> "Fr":
        return Fr(x % R)

    @staticmethod
    def checked(x: int, subject: str = "value") -> "Fr":
        """Inject `x` without reduction; raises FieldOverflow unless 0 <= x < R."""
        if not isinstance(x, int) or isinstance(x, bool):
            raise TypeError(f"{subject} must be an int, got {type(x).__name__}")
        if x < 0 or x >= R:
            raise FieldOverflow(x, R, subject)
        return Fr(x)

    @staticmethod
    def from_bytes(b: bytes) -> "Fr":
        """Parse 32 big-endian bytes; the value must be canonical."""
        if len(b) != FR_BYTE_LEN:
            raise ValueError(f"Fr.from_bytes: expected {FR_BYTE_LEN} bytes, got {len(b)}")
        return Fr.checked(int.from_bytes(b, "big"))

    @staticmethod
    def from_str(s: str) -> "Fr":
        """Decimal or 0x-hex string, canonical only."""
        s = s.strip()
        return Fr.checked(int(s, 16) if s.lower().startswith("0x") else int(s, 10))

    @staticmethod
    def zero() -> "Fr":
        return Fr(0)

    @staticmethod
    def one() -> "Fr":
        return Fr(1)

    # --- Serialization ----------------------------------------------------

    def to_bytes(self) -> bytes:
        return self.n.to_bytes(FR_BYTE_LEN, "big")

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    # --- Number protocol --------------------------------------------------

    def __int__(self) -> int:
        return self.n

    def __index__(self) -> int:
        return self.n

    def __bool__(self) -> bool:
        return self.n != 0

    def __repr__(self) -> str:
        return f"Fr({self.n})"

    def __str__(self) -> str:
        return str(self.n)

    def __hash__(self) -> int:
        return hash(self.n)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (int, Fr)):
            return NotImplemented
        return self.n == _to_int(other) % R

    def __neg__(self) -> "Fr":
        return Fr(0 if self.n == 0 else R - self.n)

    def __add__(self, other: Union[int, "Fr"]) -> "Fr":
        return Fr((self.n + _to_int(other)) % R)

    __radd__ = __add__

    def __sub__(self, other: Union[int, "Fr"]) -> "Fr":
        return Fr((self.n - _to_int(other)) % R)

    def __rsub__(self, other: Union[int, "Fr"]) -> "Fr":
        return Fr((_to_int(other) - self.n) % R)

    def __mul__(self, other: Union[int, "Fr"]) -> "Fr":
        return Fr((self.n * _to_int(other)) % R)

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> "Fr":
        return Fr(pow(self.n, exponent, R))

    def inv(self) -> "Fr":
        return Fr(inv_mod(self.n, R))


# --- Arbitrary-prime helpers ------------------------------------------------


def inv_mod(a: int, p: int) -> int:
    """Multiplicative inverse modulo prime p (Fermat)."""
    a %= p
    if a == 0:
        raise ZeroDivisionError("inverse of zero")
    return pow(a, p - 2, p)


def legendre(a: int, p: int) -> int:
    """Legendre symbol (a | p) in {-1, 0, 1}."""
    a %= p
    if a == 0:
        return 0
    ls = pow(a, (p - 1) // 2, p)
    return -1 if ls == p - 1 else 1


def sqrt_mod(a: int, p: int) -> Optional[int]:
    """
    Tonelli–Shanks square root modulo an odd prime p.
    Returns the smaller of the two roots, or None for a non-residue.
    """
    a %= p
    if a == 0:
        return 0
    if legendre(a, p) != 1:
        return None

    # p - 1 = q * 2^s with q odd
    q, s = p - 1, 0
    while q & 1 == 0:
        q >>= 1
        s += 1

    z = 2
    while legendre(z, p) != -1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(a, q, p)
    r = pow(a, (q + 1) // 2, p)

    while t != 1:
        # lowest i in [1, m) with t^(2^i) == 1
        i, t2i = 1, (t * t) % p
        while t2i != 1:
            t2i = (t2i * t2i) % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        r = (r * b) % p
        c = (b * b) % p
        t = (t * c) % p
        m = i
    return min(r, p - r)


FR_ZERO = Fr.zero()
FR_ONE = Fr.one()

__all__ = [
    "R",
    "Fr",
    "FR_ZERO",
    "FR_ONE",
    "inv_mod",
    "legendre",
    "sqrt_mod",
]
