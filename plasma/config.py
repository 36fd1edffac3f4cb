"""
Protocol configuration for the transaction-encoding core.

Goals
-----
- Immutable, typed dataclasses built once at startup and passed explicitly to
  the components; nothing in the core reads configuration from globals.
- Layered loading with clear precedence:
    1) Explicit overrides passed to `load()` (highest)
    2) Environment variables (PLASMA_*)
    3) Config file (YAML, TOML or JSON)
    4) Built-in defaults (lowest)

The bit widths and the curve are shared with the circuit definition; changing
any of them is a protocol change, not a tuning knob. Alternate values exist so
tests can run with small widths and small curves.

File layout (any of the three formats):

    widths:
      account_index: 24
      amount_exponent: 5
      amount_mantissa: 19
      fee_exponent: 6
      fee_mantissa: 10
      nonce: 32
      block_number: 32
      float_base: 10
    curve: babyjubjub
    signature_security_param: 16
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from plasma.crypto.jubjub import BABYJUBJUB, CurveParams, get_curve
from plasma.encoding.floatpack import FloatCodec
from plasma.errors import ConfigError

# ------------------------------
# Defaults
# ------------------------------

ACCOUNT_INDEX_BIT_WIDTH = 24  # balance tree depth
AMOUNT_EXPONENT_BIT_WIDTH = 5
AMOUNT_MANTISSA_BIT_WIDTH = 19
FEE_EXPONENT_BIT_WIDTH = 6
FEE_MANTISSA_BIT_WIDTH = 10
NONCE_BIT_WIDTH = 32
BLOCK_NUMBER_BIT_WIDTH = 32
FLOAT_BASE = 10
SIGNATURE_SECURITY_PARAM = 16

_ENV_WIDTHS = {
    "PLASMA_ACCOUNT_INDEX_BITS": "account_index",
    "PLASMA_AMOUNT_EXPONENT_BITS": "amount_exponent",
    "PLASMA_AMOUNT_MANTISSA_BITS": "amount_mantissa",
    "PLASMA_FEE_EXPONENT_BITS": "fee_exponent",
    "PLASMA_FEE_MANTISSA_BITS": "fee_mantissa",
    "PLASMA_NONCE_BITS": "nonce",
    "PLASMA_BLOCK_NUMBER_BITS": "block_number",
    "PLASMA_FLOAT_BASE": "float_base",
}


# ------------------------------
# Typed configuration model
# ------------------------------


@dataclass(frozen=True)
class BitWidths:
    account_index: int = ACCOUNT_INDEX_BIT_WIDTH
    amount_exponent: int = AMOUNT_EXPONENT_BIT_WIDTH
    amount_mantissa: int = AMOUNT_MANTISSA_BIT_WIDTH
    fee_exponent: int = FEE_EXPONENT_BIT_WIDTH
    fee_mantissa: int = FEE_MANTISSA_BIT_WIDTH
    nonce: int = NONCE_BIT_WIDTH
    block_number: int = BLOCK_NUMBER_BIT_WIDTH
    float_base: int = FLOAT_BASE

    def validate(self) -> "BitWidths":
        for f in fields(self):
            v = getattr(self, f.name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigError(f"{f.name} must be an integer", got=repr(v))
            if v <= 0:
                raise ConfigError(f"{f.name} must be positive", got=v)
        if self.float_base < 2:
            raise ConfigError("float_base must be at least 2", got=self.float_base)
        return self

    def amount_codec(self) -> FloatCodec:
        return FloatCodec(self.amount_exponent, self.amount_mantissa, self.float_base)

    def fee_codec(self) -> FloatCodec:
        return FloatCodec(self.fee_exponent, self.fee_mantissa, self.float_base)

    @property
    def transfer_message_bits(self) -> int:
        """Bit length of the canonical transfer message."""
        return (
            2 * self.account_index
            + self.amount_exponent
            + self.amount_mantissa
            + self.fee_exponent
            + self.fee_mantissa
            + self.nonce
            + self.block_number
        )


@dataclass(frozen=True)
class ProtocolConfig:
    widths: BitWidths = field(default_factory=BitWidths)
    curve: CurveParams = BABYJUBJUB
    signature_security_param: int = SIGNATURE_SECURITY_PARAM

    def validate(self) -> "ProtocolConfig":
        self.widths.validate()
        if self.signature_security_param <= 0:
            raise ConfigError("signature_security_param must be positive")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "widths": asdict(self.widths),
            "curve": self.curve.name,
            "signature_security_param": self.signature_security_param,
        }


DEFAULT_CONFIG = ProtocolConfig()


# ------------------------------
# File loader (YAML / TOML / JSON)
# ------------------------------


def _load_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError("config file not found", path=str(path))
    suffix = path.suffix.lower()
    try:
        with path.open("rb") as f:
            if suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(f) or {}
            elif suffix in {".toml", ".tml"}:
                data = tomllib.load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigError(f"unsupported config format: {suffix}", path=str(path))
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError("config file is not parseable", path=str(path)).with_cause(e) from e
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", path=str(path))
    return data


def _merge_dict(a: Dict[str, Any], b: Mapping[str, Any]) -> Dict[str, Any]:
    """Nested dict merge: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = _merge_dict(out[k], v)
        else:
            out[k] = v
    return out


def _env_int(name: str) -> int:
    v = os.environ[name]
    try:
        return int(v, 0)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer", got=v).with_cause(e) from e


# ------------------------------
# Main loader
# ------------------------------


def load(config_file: Optional[str | Path] = None, **overrides: Any) -> ProtocolConfig:
    """
    Build a validated ProtocolConfig.

    Precedence: overrides > env > file > defaults.

    Parameters
    ----------
    config_file : str | Path | None
        Optional YAML/TOML/JSON file (see module docstring for keys).
        Defaults to $PLASMA_CONFIG when set.
    overrides : Any
        e.g. ``load(widths={"nonce": 16}, curve="babyjubjub")``
    """
    defaults = ProtocolConfig()
    base: Dict[str, Any] = {
        "widths": asdict(defaults.widths),
        "curve": defaults.curve.name,
        "signature_security_param": defaults.signature_security_param,
    }

    # 1) File
    config_file = config_file or os.environ.get("PLASMA_CONFIG")
    if config_file:
        base = _merge_dict(base, _load_file(Path(config_file).expanduser()))

    # 2) Env
    for env_name, key in _ENV_WIDTHS.items():
        if env_name in os.environ:
            base["widths"][key] = _env_int(env_name)
    if "PLASMA_CURVE" in os.environ:
        base["curve"] = os.environ["PLASMA_CURVE"]
    if "PLASMA_SIGNATURE_SECURITY_PARAM" in os.environ:
        base["signature_security_param"] = _env_int("PLASMA_SIGNATURE_SECURITY_PARAM")

    # 3) Overrides
    base = _merge_dict(base, overrides)

    widths_raw = base.get("widths") or {}
    known = {f.name for f in fields(BitWidths)}
    unknown = sorted(set(widths_raw) - known)
    if unknown:
        raise ConfigError("unknown width keys", keys=unknown)

    curve = base["curve"]
    cfg = ProtocolConfig(
        widths=replace(BitWidths(), **widths_raw),
        curve=curve if isinstance(curve, CurveParams) else get_curve(str(curve)),
        signature_security_param=base["signature_security_param"],
    )
    return cfg.validate()


__all__ = [
    "ACCOUNT_INDEX_BIT_WIDTH",
    "AMOUNT_EXPONENT_BIT_WIDTH",
    "AMOUNT_MANTISSA_BIT_WIDTH",
    "FEE_EXPONENT_BIT_WIDTH",
    "FEE_MANTISSA_BIT_WIDTH",
    "NONCE_BIT_WIDTH",
    "BLOCK_NUMBER_BIT_WIDTH",
    "FLOAT_BASE",
    "SIGNATURE_SECURITY_PARAM",
    "BitWidths",
    "ProtocolConfig",
    "DEFAULT_CONFIG",
    "load",
]
