"""CLI entry point for zapnotes.

Connects to the configured relays, looks up the zap receipts for one public
key and prints them.

Examples:
    ```bash
    python -m zapnotes npub10elfcs4fr0l0r8af98jlmgdh9c8tcxjvz9qkw038js35mp4dma8qzvjptg
    python -m zapnotes 7e7e9c42a91bfef19fa929e5fda1b72e0ebc1a4c1141673e2794234d86addf4e --json
    python -m zapnotes npub1... --relay wss://nos.lol --relay wss://relay.damus.io
    python -m zapnotes npub1... --config config/zapnotes.yaml --log-level INFO
    ```
"""

import argparse
import asyncio
import datetime
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

import yaml

from zapnotes.core.config import ZapNotesConfig
from zapnotes.core.exceptions import (
    ConfigurationError,
    KeyFormatError,
    QueryError,
    RelayConnectionError,
)
from zapnotes.core.logger import Logger, StructuredFormatter
from zapnotes.core.yaml import load_yaml
from zapnotes.models.receipt import ZapReceipt
from zapnotes.services.connection import RelayConnection
from zapnotes.services.receipts import lookup_receipts


CONFIG_PATH = Path("config") / "zapnotes.yaml"

NO_RECEIPTS_MESSAGE = "No zapped notes found for this user on provided relays."

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

logger = Logger("cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="zapnotes",
        description="Fetch Nostr zap receipts for a public key",
    )

    parser.add_argument(
        "public_key",
        help="Public key as npub1... or 64-character hex",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help=f"Config path (default: {CONFIG_PATH}, if present)",
    )

    parser.add_argument(
        "--relay",
        dest="relays",
        action="append",
        metavar="URL",
        help="Relay URL to query; repeat to give several (overrides config)",
    )

    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print receipts as a JSON array",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install a ``StructuredFormatter`` on a stderr root handler."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def load_config(
    config_path: Path | None = None,
    relays: Sequence[str] | None = None,
) -> ZapNotesConfig:
    """Build the configuration from a YAML file and CLI overrides.

    An explicit *config_path* must exist. The default path is used only if
    present; otherwise built-in defaults apply.

    Raises:
        ConfigurationError: If the file or the resulting values are invalid.
    """
    data: dict[str, Any] = {}
    path = config_path or CONFIG_PATH
    if config_path is not None or path.exists():
        try:
            data = load_yaml(path)
        except (FileNotFoundError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(str(e)) from e
    else:
        logger.debug("config_not_found", path=str(path))

    if relays:
        data.setdefault("connection", {})["relays"] = list(relays)

    return ZapNotesConfig.from_dict(data)


def format_timestamp(created_at: int) -> str:
    """Render a Unix timestamp in the local timezone."""
    dt = datetime.datetime.fromtimestamp(created_at, tz=datetime.UTC).astimezone()
    return dt.strftime("%Y-%m-%d %H:%M:%S %Z")


def format_receipt(receipt: ZapReceipt) -> str:
    lines = [
        f"Content: {receipt.content}",
        f"Created At: {format_timestamp(receipt.created_at)}",
        f"Event ID: {receipt.id}",
    ]
    if receipt.zapped_event_id:
        lines.append(f"Zapped Note: {receipt.zapped_event_id}")
    return "\n".join(lines)


def render_receipts(
    receipts: Sequence[ZapReceipt],
    *,
    as_json: bool = False,
    out: TextIO | None = None,
) -> None:
    """Print receipts, or the "no zapped notes" message when there are none."""
    out = out if out is not None else sys.stdout

    if as_json:
        print(json.dumps([r.to_dict() for r in receipts], indent=2), file=out)
        return

    if not receipts:
        print(NO_RECEIPTS_MESSAGE, file=out)
        return

    print("Zapped Notes", file=out)
    print(file=out)
    print("\n\n".join(format_receipt(r) for r in receipts), file=out)


async def run(public_key: str, config: ZapNotesConfig, *, as_json: bool = False) -> int:
    """Bootstrap the connection, run one lookup and render the result.

    Returns:
        Process exit code.
    """
    connection = RelayConnection(config.connection)
    try:
        async with connection:
            receipts = await lookup_receipts(
                connection, public_key, timeout=config.query.timeout
            )
    except RelayConnectionError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE
    except KeyFormatError as e:
        print(str(e), file=sys.stderr)
        return EXIT_BAD_INPUT
    except QueryError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE

    render_receipts(receipts, as_json=as_json)
    return EXIT_OK


async def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point: parse args, load config and run the lookup."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config, args.relays)
    except ConfigurationError as e:
        logger.error("config_invalid", error=str(e))
        print(str(e), file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        return await run(args.public_key, config, as_json=args.as_json)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return EXIT_INTERRUPTED


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
