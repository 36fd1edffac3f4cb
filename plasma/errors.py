"""
plasma.errors
-------------

A small, consistent error system for the transaction-encoding core.

Design goals
------------
- One root `PlasmaError` with machine-friendly `code` and optional `data`.
- Concrete subclasses for the encoding and signature domains.
- Safe JSON representation (`to_dict`) suitable for logs and RPC bridges.
- Malformed input is always an exception of a known kind; a cryptographically
  invalid signature is *not* an error (the verifier returns ``False``).

Hierarchy
---------
    PlasmaError
    ├── ConfigError
    ├── EncodingError
    │   ├── EncodingOverflow
    │   │   └── FieldOverflow
    │   ├── AmountTooLarge
    │   └── InvalidAmount
    └── SignatureError
        ├── InvalidSignaturePoint
        └── InvalidScalar

This module uses only stdlib to avoid import cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(str, Enum):
    INTERNAL = "PLASMA/INTERNAL"
    CONFIG = "PLASMA/CONFIG"

    # Encoding
    ENCODING_OVERFLOW = "PLASMA/ENCODING_OVERFLOW"
    FIELD_OVERFLOW = "PLASMA/FIELD_OVERFLOW"
    AMOUNT_TOO_LARGE = "PLASMA/AMOUNT_TOO_LARGE"
    INVALID_AMOUNT = "PLASMA/INVALID_AMOUNT"

    # Signatures
    INVALID_SIGNATURE_POINT = "PLASMA/INVALID_SIGNATURE_POINT"
    INVALID_SCALAR = "PLASMA/INVALID_SCALAR"


@dataclass(eq=False)
class PlasmaError(Exception):
    """
    Root error for plasma components.

    Attributes
    ----------
    code: str
        Machine-stable error code (see ErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Optional machine data (values, widths). Must be JSON-serializable.
    cause: Optional[BaseException]
        Wrapped original exception; not included in equality comparison.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")

    def with_cause(self, exc: BaseException) -> "PlasmaError":
        """Attach the causal exception (mutates and returns self)."""
        self.cause = exc
        return self

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        """JSON-safe shape suitable for logs/RPC bridges."""
        code = self.code.value if isinstance(self.code, ErrorCode) else self.code
        out: Dict[str, Any] = {
            "code": code,
            "message": self.message,
            "data": _jsonmap(self.data),
        }
        if include_cause and self.cause is not None:
            out["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return out

    def __str__(self) -> str:  # pragma: no cover - human formatting
        code = self.code.value if isinstance(self.code, ErrorCode) else self.code
        parts = [f"{code}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class ConfigError(PlasmaError):
    def __init__(self, message="invalid configuration", **data: Any) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message, data=_jsonmap(data))


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class EncodingError(PlasmaError):
    """Base for every failure to map a value onto its fixed bit layout."""


class EncodingOverflow(EncodingError):
    """An integer does not fit its declared fixed-width field."""

    def __init__(self, value: int, width: int, subject: str = "value") -> None:
        super().__init__(
            code=ErrorCode.ENCODING_OVERFLOW,
            message=f"{subject} does not fit in {width} bits",
            data={"value": str(value), "width": width, "subject": subject},
        )


class FieldOverflow(EncodingOverflow):
    """An integer is not a canonical element of the circuit field."""

    def __init__(self, value: int, modulus: int, subject: str = "value") -> None:
        EncodingError.__init__(
            self,
            code=ErrorCode.FIELD_OVERFLOW,
            message=f"{subject} is not below the field modulus",
            data={"value": str(value), "modulus": str(modulus), "subject": subject},
        )


class AmountTooLarge(EncodingError):
    """A decimal amount exceeds what the largest exponent can represent."""

    def __init__(self, value: Any, exponent_width: int, mantissa_width: int, base: int) -> None:
        super().__init__(
            code=ErrorCode.AMOUNT_TOO_LARGE,
            message="amount is not representable with the available exponent range",
            data={
                "value": str(value),
                "exponent_width": exponent_width,
                "mantissa_width": mantissa_width,
                "base": base,
            },
        )


class InvalidAmount(EncodingError):
    """Negative, non-finite or inexact (binary float) amount."""

    def __init__(self, value: Any, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_AMOUNT,
            message=f"invalid amount: {reason}",
            data={"value": repr(value), "reason": reason},
        )


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


class SignatureError(PlasmaError):
    """Malformed signature material (as opposed to a merely wrong signature)."""


class InvalidSignaturePoint(SignatureError):
    def __init__(self, x: int, y: int, reason: str = "point is not on the curve") -> None:
        super().__init__(
            code=ErrorCode.INVALID_SIGNATURE_POINT,
            message=reason,
            data={"x": str(x), "y": str(y)},
        )


class InvalidScalar(SignatureError):
    def __init__(self, value: int, order: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SCALAR,
            message="scalar is outside the subgroup order range",
            data={"value": str(value), "order": str(order)},
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; stringify the rest; hex-encode bytes.
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    return str(v)


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"


__all__ = [
    "ErrorCode",
    "PlasmaError",
    "ConfigError",
    "EncodingError",
    "EncodingOverflow",
    "FieldOverflow",
    "AmountTooLarge",
    "InvalidAmount",
    "SignatureError",
    "InvalidSignaturePoint",
    "InvalidScalar",
]
