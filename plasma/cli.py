#!/usr/bin/env python3
"""
plasma.cli
==========

Operator/debug tooling around the encoding core.

Examples:
  python -m plasma.cli pack-amount 123456789
  python -m plasma.cli closest-packable 10231 --fee
  python -m plasma.cli keygen --seed 0x01
  python -m plasma.cli sign tx.json --seed 0x01 > signed.json
  python -m plasma.cli verify signed.json --pub-x ... --pub-y ...
  python -m plasma.cli witness signed.json --json

Transactions are read as JSON in the shape produced by `TransferTx.to_dict()`.
"""

from __future__ import annotations

import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer

from plasma.circuit.witness import transfer_witness
from plasma.config import ProtocolConfig, load
from plasma.crypto import eddsa, sigcodec
from plasma.encoding import bits
from plasma.errors import PlasmaError
from plasma.logging import configure_from_env
from plasma.models.tx import TransferTx
from plasma.version import __version__

app = typer.Typer(
    name="plasma",
    help="Encode, sign and verify rollup transactions",
    no_args_is_help=True,
    add_completion=False,
)

_CONFIG_OPT = typer.Option(None, "--config", "-c", help="YAML/TOML/JSON protocol config")


def _die(msg: str, code: int = 2) -> NoReturn:
    sys.stderr.write(msg.rstrip() + "\n")
    raise typer.Exit(code)


def _cfg(path: Optional[Path]) -> ProtocolConfig:
    try:
        return load(path)
    except PlasmaError as e:
        _die(f"config error: {e}")


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        _die(f"not a decimal: {value!r}")


def _emit(obj: Dict[str, Any], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(obj, sort_keys=True))
        return
    for k, v in obj.items():
        typer.echo(f"{k:>18}: {v}")


def _read_tx(path: Path, unsigned: bool = False) -> TransferTx:
    try:
        d = json.loads(path.read_text(encoding="utf-8"))
        if unsigned and isinstance(d, dict):
            d.setdefault("signature", {"r_x": 0, "r_y": 0, "s": 0})
        return TransferTx.from_dict(d)
    except (OSError, ValueError, KeyError, TypeError, PlasmaError) as e:
        _die(f"cannot read transaction '{path}': {e}")


def _key(seed: str) -> eddsa.PrivateKey:
    s = seed[2:] if seed.lower().startswith("0x") else seed
    try:
        return eddsa.PrivateKey.from_seed(bytes.fromhex(s))
    except ValueError:
        _die("seed must be hex")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"plasma {__version__}")
        raise typer.Exit(0)


@app.callback()
def _meta(
    version: bool = typer.Option(
        False, "--version", "-V", help="Print version and exit", is_eager=True, callback=_print_version
    ),
) -> None:
    configure_from_env()


def _pack(value: str, fee: bool, config: Optional[Path], as_json: bool) -> None:
    cfg = _cfg(config)
    codec = cfg.widths.fee_codec() if fee else cfg.widths.amount_codec()
    amount = _decimal(value)
    try:
        exponent, mantissa = codec.split(amount)
        encoded = codec.encode(amount)
    except PlasmaError as e:
        _die(str(e), 1)
    _emit(
        {
            "exponent": exponent,
            "mantissa": mantissa,
            "packed_value": str(codec.decode(encoded)),
            "bits_le": "".join("1" if b else "0" for b in encoded),
            "field_element": str(bits.le_bits_to_int(encoded)),
        },
        as_json,
    )


@app.command("pack-amount")
def pack_amount(
    value: str = typer.Argument(..., help="Decimal amount"),
    config: Optional[Path] = _CONFIG_OPT,
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show the float packing of an amount."""
    _pack(value, False, config, as_json)


@app.command("pack-fee")
def pack_fee(
    value: str = typer.Argument(..., help="Decimal fee"),
    config: Optional[Path] = _CONFIG_OPT,
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show the float packing of a fee."""
    _pack(value, True, config, as_json)


@app.command("closest-packable")
def closest_packable(
    value: str = typer.Argument(..., help="Decimal value"),
    fee: bool = typer.Option(False, "--fee", help="Use the fee codec instead of the amount codec"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Largest packable value not exceeding VALUE."""
    cfg = _cfg(config)
    codec = cfg.widths.fee_codec() if fee else cfg.widths.amount_codec()
    try:
        typer.echo(str(codec.closest_packable(_decimal(value))))
    except PlasmaError as e:
        _die(str(e), 1)


@app.command("keygen")
def keygen(
    seed: str = typer.Option(..., "--seed", help="Hex seed for deterministic key derivation"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Derive a reference key pair and print the public key."""
    pub = _key(seed).public_key()
    _emit({"pub_x": str(pub.x), "pub_y": str(pub.y)}, as_json)


@app.command("message")
def message(
    tx_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Print the canonical signed-message bytes (hex) of a transfer."""
    cfg = _cfg(config)
    tx = _read_tx(tx_file, unsigned=True)
    try:
        typer.echo("0x" + tx.message_bytes(cfg.widths).hex())
    except PlasmaError as e:
        _die(str(e), 1)


@app.command("sign")
def sign(
    tx_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    seed: str = typer.Option(..., "--seed", help="Hex seed of the signing key"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Sign a transfer with the reference signer; prints the signed JSON."""
    cfg = _cfg(config)
    tx = _read_tx(tx_file, unsigned=True)
    try:
        signature = _key(seed).sign(tx.message_bytes(cfg.widths))
    except PlasmaError as e:
        _die(str(e), 1)
    d = tx.to_dict()
    d["signature"] = sigcodec.signature_to_tx(signature).to_dict()
    typer.echo(json.dumps(d, sort_keys=True))


@app.command("verify")
def verify(
    tx_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    pub_x: str = typer.Option(..., "--pub-x"),
    pub_y: str = typer.Option(..., "--pub-y"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Verify a transfer's signature; exit code 0 if valid, 1 otherwise."""
    cfg = _cfg(config)
    tx = _read_tx(tx_file)
    try:
        pub = cfg.curve.from_xy(int(pub_x, 0), int(pub_y, 0))
    except ValueError:
        _die("public key coordinates must be integers")
    if pub is None:
        _die("public key is not on the curve", 1)
    try:
        ok = tx.verify_signature(pub, cfg)
    except PlasmaError as e:
        _die(f"malformed signature: {e}", 1)
    typer.echo("valid" if ok else "invalid")
    if not ok:
        raise typer.Exit(1)


@app.command("witness")
def witness(
    tx_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    config: Optional[Path] = _CONFIG_OPT,
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Print the circuit witness of a signed transfer."""
    cfg = _cfg(config)
    tx = _read_tx(tx_file)
    try:
        w = transfer_witness(tx, cfg)
    except PlasmaError as e:
        _die(str(e), 1)
    names = ["from", "to", "amount", "fee", "nonce", "good_until_block", "sig_r_x", "sig_r_y", "sig_s"]
    _emit(dict(zip(names, (str(v) for v in w.as_field_list()))), as_json)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
