"""CLI entrypoint for Provisio."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from provisio import __version__
from provisio.cli.handlers import (
    handle_clear_cache,
    handle_discover,
    handle_options,
    handle_resolve,
    handle_status,
)
from provisio.constants.branding import CLI_DESCRIPTION
from provisio.constants.discovery import DEFAULT_PLATFORM, VALID_PLATFORMS
from provisio.exceptions import ConfigError, ProvisioError

HANDLERS = {
    "discover": handle_discover,
    "status": handle_status,
    "resolve": handle_resolve,
    "options": handle_options,
    "clear-cache": handle_clear_cache,
}


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="provisio",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--cache-dir", type=Path, default=None, help="Cache directory (default: ~/.provisio)")
    parser.add_argument(
        "--profiles-dir",
        type=Path,
        default=None,
        help="Provisioning profile directory (default: Xcode's UserData/Provisioning Profiles)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    discover = subparsers.add_parser("discover", help="List signing identities and provisioning profiles")
    discover.add_argument("--force-refresh", action="store_true", help="Ignore cached discovery results")

    subparsers.add_parser("status", help="Summarise whether signing is configured")

    resolve = subparsers.add_parser("resolve", help="Pick identity and profile, and write entitlements")
    _add_project_arguments(resolve)
    resolve.add_argument(
        "-p",
        "--platform",
        choices=VALID_PLATFORMS,
        default=DEFAULT_PLATFORM,
        help=f"Target platform (default: {DEFAULT_PLATFORM})",
    )
    resolve.add_argument("--team", default=None, help="Restrict automatic profile matching to this team")
    resolve.add_argument("--identity", default=None, help="Pin an identity by name substring or digest")
    resolve.add_argument("--profile", default=None, help="Pin a profile by path substring or exact name")
    resolve.add_argument("--force-refresh", action="store_true", help="Ignore cached discovery results")

    options = subparsers.add_parser("options", help="Show one signing option per team for the bundle id")
    _add_project_arguments(options)
    options.add_argument("-p", "--platform", choices=VALID_PLATFORMS, default=None, help="Only consider this platform")
    options.add_argument("--team", default=None, help="Only show this team")
    options.add_argument("--apply", action="store_true", help="Write the recommended option into provisio.yaml")

    subparsers.add_parser("clear-cache", help="Delete cached discovery results")

    return parser


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Project root path")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-b", "--bundle-id", default=None, help="Bundle id (default: from provisio.yaml)")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )

    handler = HANDLERS.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")

    try:
        return handler(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ProvisioError as exc:
        print(f"Signing error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
