#!/usr/bin/env python3
"""tablecfg: provision the configuration table and print its snapshot"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from .adapters.client_settings import load_client_settings, load_table_spec
from .adapters.dynamodb import DynamoDbTableStore
from .config import config
from .core.errors import BootstrapError
from .core.locator import ConfigLocator

logger = logging.getLogger("tablecfg")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tablecfg",
        description="Ensure the DynamoDB configuration table exists and print its properties.",
    )
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="Delete and recreate the table before loading (destroys all rows).",
    )
    parser.add_argument(
        "--format",
        choices=("properties", "json"),
        default="properties",
        help="Output format (default: properties).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def render(source, fmt: str) -> str:
    items = sorted(source.source.items())
    if fmt == "json":
        return json.dumps(dict(items), indent=2, sort_keys=True)
    return "\n".join(f"{key}={value}" for key, value in items)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if (args.debug or config.DEBUG) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = load_table_spec(config)
        if args.recreate:
            spec = replace(spec, recreate=True)
        store = DynamoDbTableStore.from_settings(load_client_settings(config))
        outcome = ConfigLocator(spec).try_locate(store)
    except BootstrapError as exc:
        logger.error("Configuration bootstrap failed: %s", exc)
        return 1

    if not outcome.ok:
        return 1

    if outcome.table is not None:
        logger.info("Table [%s] is %s", outcome.table.table_name, outcome.table.status)
    output = render(outcome.property_source, args.format)
    if output:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
