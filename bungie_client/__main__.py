"""
Entry point for the bungie_client package: a small diagnostic CLI.
"""

import argparse
import asyncio
import json
import logging
import re
import sys

from pydantic_core import to_jsonable_python

from .application.exceptions import BungieClientError
from .infrastructure.api_client import BungieClient
from .infrastructure.api_models import (
    BungieMembershipType,
    DestinyComponentType,
    ExactSearchRequest,
)
from .infrastructure.containers import Container
from .infrastructure.decorators import retry_on_transient_error

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """Applies basic logging configuration."""
    logging.basicConfig(level=level)


def parse_bungie_name(value: str) -> ExactSearchRequest:
    """Splits ``Name#1234`` into an exact-search request."""
    name, sep, code = value.rpartition("#")
    if not sep or not name or not code.isdigit():
        raise argparse.ArgumentTypeError(
            f"Bungie name must look like Name#1234, got {value!r}"
        )
    return ExactSearchRequest(display_name=name, display_name_code=int(code))


def parse_component(value: str) -> DestinyComponentType:
    """Accepts a component by number (200) or name (Characters)."""
    if value.isdigit():
        return DestinyComponentType(int(value))
    key = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", value).upper().replace("-", "_")
    try:
        return DestinyComponentType[key]
    except KeyError:
        raise argparse.ArgumentTypeError(f"Unknown component {value!r}") from None


@retry_on_transient_error
async def run_command(client: BungieClient, args: argparse.Namespace, config):
    """Dispatches one subcommand to the matching endpoint."""

    if args.command == "locales":
        return await client.get_available_locales()
    if args.command == "settings":
        return await client.get_common_settings()
    if args.command == "alerts":
        return await client.get_global_alerts(
            includestreaming=args.include_streaming or None
        )
    if args.command == "manifest":
        return await client.destiny2_get_destiny_manifest()
    if args.command == "search-player":
        return await client.destiny2_search_destiny_player_by_bungie_name(
            BungieMembershipType(args.membership_type), args.bungie_name
        )
    if args.command == "profile":
        return await client.destiny2_get_profile(
            args.membership_id,
            BungieMembershipType(args.membership_type),
            components=args.components,
        )
    if args.command == "oauth-url":
        return client.oauth_get_authorization_url(
            config.get("language") or "en", state=args.state
        )
    raise ValueError(f"Unknown command {args.command!r}")


async def run_application(args: argparse.Namespace):
    """Wires and runs the client using the DI container."""

    container = Container()
    config = container.config()
    setup_logging(level=config.get("log_level") or "INFO")

    try:
        client = container.bungie_client()
        async with client:
            result = await run_command(client, args, config)
    except BungieClientError as e:
        logger.error(f"A client error occurred: {e}")
        sys.exit(1)

    print(json.dumps(to_jsonable_python(result, by_alias=True), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bungie_client", description="Bungie.net API diagnostics"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("locales", help="List available locales.")
    subparsers.add_parser("settings", help="Show common platform settings.")

    alerts = subparsers.add_parser("alerts", help="Show active global alerts.")
    alerts.add_argument(
        "--include-streaming",
        action="store_true",
        help="Include streaming alerts.",
    )

    subparsers.add_parser("manifest", help="Show the current Destiny 2 manifest.")

    search = subparsers.add_parser(
        "search-player", help="Find Destiny memberships by Bungie name."
    )
    search.add_argument("bungie_name", type=parse_bungie_name, help="Name#1234")
    search.add_argument(
        "--membership-type",
        type=int,
        default=int(BungieMembershipType.ALL),
        help="Platform to search; -1 for all.",
    )

    profile = subparsers.add_parser("profile", help="Fetch a Destiny profile.")
    profile.add_argument("membership_type", type=int)
    profile.add_argument("membership_id", type=int)
    profile.add_argument(
        "--components",
        nargs="+",
        type=parse_component,
        default=[DestinyComponentType.PROFILES],
        help="Components by number or name, e.g. 100 Characters.",
    )

    oauth = subparsers.add_parser(
        "oauth-url", help="Print the OAuth authorization URL."
    )
    oauth.add_argument("--state", help="Opaque state echoed back on redirect.")

    return parser


if __name__ == "__main__":
    cli_args = build_parser().parse_args()
    asyncio.run(run_application(cli_args))
