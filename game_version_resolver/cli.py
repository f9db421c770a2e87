#!/usr/bin/env python3
"""CLI entry point for Game Version Resolver."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import httpx

from . import __version__
from .config import DEFAULT_GAME, GAMES, get_game_config
from .models import MinecraftVersion
from .normalizer import normalize_version
from .provider import AsyncMinecraftVersionProvider, MinecraftVersionProvider
from .version_filter import GameVersionFilter, filter_versions

logger = logging.getLogger(__name__)


# ANSI color codes for terminal output
class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, 'isatty'):
        return False
    if not sys.stdout.isatty():
        return False
    return True


def print_success(message: str):
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {message}{Colors.END}")


def print_warning(message: str):
    """Print a warning message."""
    print(f"{Colors.YELLOW}⚠ {message}{Colors.END}")


def print_error(message: str):
    """Print an error message."""
    print(f"{Colors.RED}✗ {message}{Colors.END}")


def print_info(message: str):
    """Print an info message."""
    print(f"{Colors.CYAN}ℹ {message}{Colors.END}")


def print_games_list():
    print(f"\n{Colors.BOLD}Available Games ({len(GAMES)} total):{Colors.END}\n")
    for key, config in GAMES.items():
        print(f"  {Colors.GREEN}{key:20}{Colors.END} {config.display_name}")
    print()


def print_versions(title: str, versions: List[MinecraftVersion]):
    print(f"\n{Colors.BOLD}{title} ({len(versions)} total):{Colors.END}\n")
    if not versions:
        print_warning("No matching versions found")
        return

    for v in versions:
        marker = f" {Colors.YELLOW}({v.type.value}){Colors.END}" if not v.is_release else ""
        print(f"  {Colors.CYAN}{v.id:30}{Colors.END} {v.version}{marker}")
    print()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game-version-resolver",
        description="Normalize Minecraft version ids and resolve version ranges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # Normalize raw version ids (offline)
  %(prog)s --normalize 20w45a 1.16.5-rc1 b1.8.1

  # Resolve a range against the version manifest
  %(prog)s --range "[1.16,1.17)"

  # Oldest release of every range
  %(prog)s --range ">=1.20" --filter "releases, min"

  # List all releases
  %(prog)s --list-versions --filter releases

Range Syntax:
  Comparators (>=1.16 <1.17), x-ranges (1.20.x), tilde/caret (~1.20.1, ^1.16),
  hyphen ranges (1.16 - 1.17), intervals ([1.16,1.17), (,1.12]),
  raw ids (20w45a) and "||" alternatives.

Filter Flags:
  releases, betas, alphas, snapshots, any, min-patch, max-patch, min-minor,
  max-minor, min-major, max-major, min, max (separated by "," or "|")
""",
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    query_group = parser.add_argument_group('Queries')
    query_group.add_argument(
        "--normalize", "-n",
        nargs="+",
        metavar="ID",
        help="Print the canonical form of raw version ids (no network access)",
    )
    query_group.add_argument(
        "--range", "-r",
        action="append",
        metavar="RANGE",
        help="Version range to resolve. Repeat to combine ranges with OR.",
    )
    query_group.add_argument(
        "--list-versions",
        action="store_true",
        help="List all known versions and exit",
    )
    query_group.add_argument(
        "--filter",
        metavar="FLAGS",
        default=None,
        help="Filter flags applied to resolved versions, e.g. \"min-major, releases\"",
    )

    game_group = parser.add_argument_group('Game Selection')
    game_group.add_argument(
        "--game", "-g",
        default=DEFAULT_GAME,
        help=f"Game to resolve versions for. Default: {DEFAULT_GAME}",
    )
    game_group.add_argument(
        "--list-games",
        action="store_true",
        help="List all supported games and exit",
    )

    other_group = parser.add_argument_group('Other Options')
    other_group.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Use async HTTP fetching",
    )
    other_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    other_group.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output",
    )
    other_group.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    return parser


def _query(provider: MinecraftVersionProvider, args, version_filter: GameVersionFilter):
    results = []
    if args.range:
        results.append((" || ".join(args.range), provider.get_versions(args.range, version_filter)))
    if args.list_versions:
        versions = filter_versions(provider.get_all_versions().values(), version_filter)
        results.append(("All versions", versions))
    return results


async def _query_async(provider: AsyncMinecraftVersionProvider, args, version_filter: GameVersionFilter):
    async with provider:
        results = []
        if args.range:
            results.append((" || ".join(args.range), await provider.get_versions(args.range, version_filter)))
        if args.list_versions:
            versions = await provider.get_all_versions()
            results.append(("All versions", filter_versions(versions.values(), version_filter)))
        return results


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv

    # Pre-parse to check for --no-color before creating parser
    if '--no-color' in argv or not supports_color():
        Colors.disable()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()

    if args.list_games:
        print_games_list()
        return

    # Configure logging
    if args.quiet:
        log_level = logging.WARNING
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not (args.normalize or args.range or args.list_versions):
        print_error("Nothing to do: use --normalize, --range or --list-versions")
        print_info("Use --help for usage examples")
        sys.exit(1)

    version_filter = GameVersionFilter.NONE
    if args.filter:
        version_filter = GameVersionFilter.parse(args.filter)
        if version_filter is None:
            print_error(f"Unknown filter: {args.filter}")
            sys.exit(1)

    try:
        config = get_game_config(args.game)
    except ValueError as e:
        print_error(str(e))
        print_info("Use --list-games to see all supported games")
        sys.exit(1)

    if args.normalize:
        for version_id in args.normalize:
            print(f"{Colors.CYAN}{version_id:30}{Colors.END} {normalize_version(version_id)}")

    if not (args.range or args.list_versions):
        return

    try:
        if args.use_async:
            results = asyncio.run(_query_async(AsyncMinecraftVersionProvider(config.name), args, version_filter))
        else:
            with MinecraftVersionProvider(config.name) as provider:
                results = _query(provider, args, version_filter)

        for title, versions in results:
            print_versions(title, versions)

        if not args.quiet:
            print_success(f"Resolved {sum(len(x) for _, x in results)} {config.display_name} versions")

    except ValueError as e:
        print_error(f"Invalid input: {e}")
        sys.exit(1)
    except httpx.HTTPError as e:
        print_error(f"Failed to fetch versions: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        print_warning("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
