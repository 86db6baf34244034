# SPDX-License-Identifier: MIT
"""Command-line interface for winsdk."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from winsdk.core.errors import WinSdkError
from winsdk.core.info import SdkInfo
from winsdk.core.resolver import SdkResolver
from winsdk.core.version import SdkVersion
from winsdk.store import REGISTRY_VIEWS, default_store
from winsdk.store.base import ProcessEnvironment

# Set up logging
logger = logging.getLogger("winsdk")

REGISTRY_VIEW_VAR = "WINSDK_REGISTRY_VIEW"

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def get_registry_view(cli_value: str | None = None) -> int:
    """Resolve which registry view to query.

    Precedence (highest to lowest):
        1. Command line: winsdk --registry-view=64
        2. Environment variable: WINSDK_REGISTRY_VIEW=64
        3. 32

    Raises:
        ValueError: If the selected value is not 32 or 64.
    """
    raw = cli_value or os.environ.get(REGISTRY_VIEW_VAR) or "32"
    try:
        view = int(raw)
    except ValueError:
        view = -1
    if view not in REGISTRY_VIEWS:
        msg = f"invalid registry view {raw!r} (expected 32 or 64)"
        raise ValueError(msg)
    return view


def make_resolver(args: argparse.Namespace) -> SdkResolver:
    """Create a resolver for the host registry and process environment."""
    view = get_registry_view(getattr(args, "registry_view", None))
    return SdkResolver(default_store(view), ProcessEnvironment())


def format_info(info: SdkInfo) -> str:
    """Format an SdkInfo for terminal output."""
    lines = [
        f"Installation folder: {info.installation_folder}",
        f"Product name:        {info.product_name or '(unknown)'}",
        f"Product version:     {info.product_version}",
    ]
    return "\n".join(lines)


def cmd_find(args: argparse.Namespace) -> int:
    """Resolve a single selector and print the installation."""
    setup_logging(args.verbose, args.debug)

    try:
        selector = SdkVersion.parse(getattr(args, "selector", None) or "any")
        resolver = make_resolver(args)
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    try:
        info = resolver.find(selector)
    except WinSdkError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if info is None:
        if args.json:
            print("null")
        else:
            logger.warning("No Windows SDK found for selector '%s'", selector)
        return EXIT_NOT_FOUND

    if args.json:
        print(json.dumps(info.to_dict(), indent=2))
    else:
        print(format_info(info))
    return EXIT_FOUND


def cmd_list(args: argparse.Namespace) -> int:
    """List every installation that resolves."""
    setup_logging(args.verbose, args.debug)

    try:
        resolver = make_resolver(args)
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    try:
        found = list(resolver.find_all())
    except WinSdkError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if args.json:
        records = [{"Selector": str(sel), **info.to_dict()} for sel, info in found]
        print(json.dumps(records, indent=2))
    else:
        for selector, info in found:
            print(f"{str(selector):>5}  {info}")
        if not found:
            logger.warning("No Windows SDK found")

    return EXIT_FOUND if found else EXIT_NOT_FOUND


def add_common_args(
    parser: argparse.ArgumentParser, *, subcommand: bool = False
) -> None:
    """Add common arguments to a parser.

    Subcommand parsers leave unset options out of the namespace so that
    options given before the subcommand are kept.
    """
    kwargs: dict[str, object] = {"default": argparse.SUPPRESS} if subcommand else {}
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output", **kwargs
    )
    parser.add_argument("--debug", action="store_true", help="Debug output", **kwargs)
    parser.add_argument(
        "--json", action="store_true", help="Print JSON output", **kwargs
    )
    parser.add_argument(
        "--registry-view",
        choices=[str(view) for view in REGISTRY_VIEWS],
        help=f"Registry view to query (default: ${REGISTRY_VIEW_VAR} or 32)",
        **kwargs,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the winsdk CLI."""
    parser = argparse.ArgumentParser(
        prog="winsdk",
        description="Locate installed Windows SDKs.",
        epilog="Run 'winsdk <command> --help' for command-specific help.",
    )
    from winsdk import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Default command args (for 'winsdk' with no subcommand)
    add_common_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    selectors = ", ".join(str(member) for member in SdkVersion)

    # winsdk find
    find_parser = subparsers.add_parser("find", help="Find one Windows SDK")
    add_common_args(find_parser, subcommand=True)
    find_parser.add_argument(
        "selector",
        nargs="?",
        default="any",
        help=f"SDK to look for: {selectors} (default: any)",
    )
    find_parser.set_defaults(func=cmd_find)

    # winsdk list
    list_parser = subparsers.add_parser("list", help="List all Windows SDKs found")
    add_common_args(list_parser, subcommand=True)
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)

    # Handle default command (no subcommand specified)
    if args.command is None:
        args.selector = "any"
        return cmd_find(args)

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
