"""
Command-line interface for torkeys.

Configuration is loaded with the following priority (highest to lowest):
1. CLI arguments
2. Environment variables
3. Config file (~/.torkeys/config.toml)
4. Built-in defaults

Key material is written to stdout only. Nothing is persisted.
"""

from __future__ import annotations

import json
import sys
from typing import Annotated, Any

import typer
from loguru import logger

from torkeys.address import decode_address, derive_address
from torkeys.encoding import decode_key, encode_key
from torkeys.errors import TorKeysError
from torkeys.keys import generate_keypair
from torkeys.models import TorKeys
from torkeys.settings import (
    OutputFormat,
    TorKeysSettings,
    ensure_config_file,
    get_settings,
    reset_settings,
)

app = typer.Typer(
    name="torkeys",
    help="Generate Ed25519 keys and Tor v3 onion addresses",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure loguru logging with consistent format.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level.upper(),
        colorize=True,
    )


def setup_cli(log_level: str | None = None) -> TorKeysSettings:
    """
    Reset the settings cache, configure logging and return settings.

    Log level priority: CLI argument > settings (env/config) > default "INFO"
    """
    reset_settings()
    settings = get_settings()

    effective_log_level = log_level if log_level is not None else settings.logging.level
    setup_logging(effective_log_level)

    return settings


def _use_json(settings: TorKeysSettings, json_output: bool) -> bool:
    return json_output or settings.output.format == OutputFormat.JSON


def _emit(data: dict[str, Any], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(data, indent=2))
        return
    for key, value in data.items():
        typer.echo(f"{key}: {value}")


LogLevelOption = Annotated[
    str | None, typer.Option("--log-level", "-l", help="Log level (overrides settings)")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


@app.command()
def generate(
    json_output: JsonOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Generate a new keypair and print its onion address and keys (base64)."""
    settings = setup_cli(log_level)

    try:
        keys = TorKeys.from_keypair(generate_keypair())
    except TorKeysError as e:
        logger.error(f"Failed to generate keypair: {e}")
        raise typer.Exit(1)

    if settings.logging.sensitive:
        logger.debug(f"Private key: {keys.private_key.get_secret_value()}")
    logger.info(f"Generated onion address {keys.address}")

    _emit(keys.to_dict(), _use_json(settings, json_output))


@app.command()
def address(
    public_key: Annotated[str, typer.Argument(help="Ed25519 public key (base64 by default)")],
    hex_input: Annotated[
        bool, typer.Option("--hex", help="Public key is hex encoded instead of base64")
    ] = False,
    json_output: JsonOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Derive the onion address of an existing public key."""
    settings = setup_cli(log_level)

    try:
        key_bytes = bytes.fromhex(public_key) if hex_input else decode_key(public_key)
        onion_address = derive_address(key_bytes)
    except (TorKeysError, ValueError) as e:
        logger.error(f"Invalid public key: {e}")
        raise typer.Exit(1)

    _emit(
        {"address": onion_address, "public_key": encode_key(key_bytes)},
        _use_json(settings, json_output),
    )


@app.command()
def decode(
    onion_address: Annotated[str, typer.Argument(help="v3 onion address")],
    json_output: JsonOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Validate an onion address and print the public key it encodes."""
    settings = setup_cli(log_level)

    try:
        public_key = decode_address(onion_address)
    except TorKeysError as e:
        logger.error(f"Invalid onion address: {e}")
        raise typer.Exit(1)

    _emit(
        {"public_key": encode_key(public_key), "public_key_hex": public_key.hex()},
        _use_json(settings, json_output),
    )


@app.command("config-init")
def config_init(log_level: LogLevelOption = None) -> None:
    """Create a commented config file template if none exists."""
    setup_cli(log_level)
    config_path = ensure_config_file()
    typer.echo(f"Config file: {config_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
