"""
Query the pickup-point catalog from the command line.

Prints the query result as JSON. Settings come from ``CATALOG_*`` environment
variables (or ``.env``) and can be overridden with flags.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from shared.config import CatalogSettings, get_settings
from shared.errors import CatalogError
from shared.logging import configure_logging

from .client import CatalogClient


async def run_query(client: CatalogClient, command: str, value: Any = None) -> Any:
    """Dispatch one CLI command to the client."""
    if command == "countries":
        return await client.get_countries()
    if command == "country":
        return await client.get_by_country(value)
    if command == "id":
        return await client.get_by_id(value)
    if command == "location":
        return await client.find_location(value)
    return await client.markets()


def load_settings(args: argparse.Namespace) -> CatalogSettings:
    """Read settings from the environment, with CLI flags taking precedence."""
    overrides = {}
    if args.url is not None:
        overrides["url"] = args.url
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    return get_settings(**overrides)


async def query(settings: CatalogSettings, args: argparse.Namespace) -> Any:
    """Run the requested query against a client built from ``settings``."""
    async with CatalogClient.from_settings(settings, refresh_on_init=False) as client:
        return await run_query(client, args.command, getattr(args, "value", None))


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the pickup-point catalog.")
    parser.add_argument("--url", default=None, help="Catalog URL (defaults to CATALOG_URL)")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write the JSON result")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("countries", help="List country names")
    country = subparsers.add_parser("country", help="Pickup points of one country")
    country.add_argument("value", metavar="NAME")
    by_id = subparsers.add_parser("id", help="Pickup points of the country containing a point id")
    by_id.add_argument("value", metavar="ID", type=int)
    location = subparsers.add_parser("location", help="A single pickup point by id")
    location.add_argument("value", metavar="ID", type=int)
    subparsers.add_parser("all", help="The whole catalog")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"[pickup-catalog] invalid configuration: {exc}", file=sys.stderr)
        return 2

    # stdout carries the JSON result only
    configure_logging("pickup_catalog", settings.log_level, stream=sys.stderr)

    try:
        result = asyncio.run(query(settings, args))
    except KeyboardInterrupt:
        return 130
    except CatalogError as exc:
        print(f"[pickup-catalog] failed: {exc}", file=sys.stderr)
        return 1

    rendered = json.dumps(result, indent=2, ensure_ascii=False)
    print(rendered)

    if args.output:
        args.output.write_text(rendered, encoding="utf-8")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
