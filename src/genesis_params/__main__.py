"""
Genesis parameter generator CLI entry point.

Usage::

    python -m genesis_params generate params.yaml --network mainnet -o artifacts.json
    python -m genesis_params generate params.yaml --network all --format yaml
    python -m genesis_params extradata 0xff19437f7e54c71e06ee852d9331a1de74947a9c ...
    python -m genesis_params inspect 0x0000...

Global options:
    -v, --verbose   Log at DEBUG level
    --no-color      Disable ANSI colors in log output
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from genesis_params.config import ALL_NETWORKS, DEFAULT_NETWORK
from genesis_params.genesis import GenesisParamsConfig, build_artifacts, to_hex
from genesis_params.types import FormatError, GenesisParamsError
from genesis_params.validators import ValidatorSet, build_extra_data, parse_extra_data

logger = logging.getLogger(__name__)

_EVEN_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


class _CliHandler(logging.StreamHandler):
    """Marker type so repeated invocations replace rather than stack handlers."""


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = _CliHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _CliHandler)]:
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)


def render(document: Any, fmt: str) -> str:
    """Serialize an artifacts document as JSON or YAML text."""
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False)
    return json.dumps(document, indent=2) + "\n"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
@click.option("--no-color", is_flag=True, help="Disable colored log output")
def cli(verbose: bool, no_color: bool) -> None:
    """Generate genesis extraData and contract constructor parameters."""
    setup_logging(verbose=verbose, no_color=no_color)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--network",
    "-n",
    default=DEFAULT_NETWORK,
    show_default=True,
    help=f"Network to generate, or '{ALL_NETWORKS}' for every network in the file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the artifacts to this file instead of stdout",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format (default: json)",
)
def generate(config_path: Path, network: str, output: Path | None, fmt: str) -> None:
    """
    Generate the artifacts document for a network.

    Examples:
        # One network to stdout
        genesis-params generate params.yaml --network testnet

        # Every network, as YAML, to a file
        genesis-params generate params.yaml --network all --format yaml -o artifacts.yaml
    """
    logger.info("Loading config from %s", config_path)
    try:
        config = GenesisParamsConfig.from_yaml_file(config_path)
        names = sorted(config.networks) if network == ALL_NETWORKS else [network]
        documents = {}
        for name in names:
            selected = config.network(name)
            documents[name] = build_artifacts(selected).to_document()
            logger.info(
                "Generated %s: %d validators, %d members",
                name,
                len(selected.validators),
                len(selected.members),
            )
    except (GenesisParamsError, ValidationError, yaml.YAMLError) as e:
        logger.error("Generation failed: %s", e)
        raise click.ClickException(str(e)) from e

    document = documents if network == ALL_NETWORKS else documents[network]
    text = render(document, fmt.lower())

    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")
        logger.info("Artifacts written to %s", output)


@cli.command()
@click.argument("addresses", nargs=-1, required=True)
def extradata(addresses: tuple[str, ...]) -> None:
    """
    Print the extraData hex for the given consensus addresses.

    Each address doubles as its own fee address, which does not affect
    extraData.
    """
    try:
        validator_set = ValidatorSet.build(
            {"consensusAddr": addr, "feeAddr": addr} for addr in addresses
        )
    except GenesisParamsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(to_hex(build_extra_data(validator_set)))


@cli.command()
@click.argument("blob")
def inspect(blob: str) -> None:
    """Decode an extraData hex blob and print its addresses, checksummed."""
    digits = blob[2:] if blob[:2] in ("0x", "0X") else blob
    # bytes.fromhex tolerates embedded whitespace, so check the digits first.
    if not _EVEN_HEX.fullmatch(digits):
        raise click.ClickException(f"not a hex string: {blob!r}")
    raw = bytes.fromhex(digits)

    try:
        addresses = parse_extra_data(raw)
    except FormatError as e:
        raise click.ClickException(str(e)) from e

    logger.debug("extraData holds %d addresses", len(addresses))
    for addr in addresses:
        click.echo(addr.to_checksum())


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
