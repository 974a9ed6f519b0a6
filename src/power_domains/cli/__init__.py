"""
Command-line interface for power-domains.

Provides CLI commands via the `power-domains` or `pdt` command:

    power-domains show <file>            - Table of declared power domains
    power-domains check <file>           - Validate domains and setpoints
    power-domains pins <file> <domain>   - Pins supplied by one domain
    power-domains config                 - View/manage configuration

Examples:
    pdt show chip.toml
    pdt show chip.yaml --format json
    pdt check chip.toml
    pdt pins chip.toml vddio
    pdt config --init
"""

import argparse
import logging
import sys
from typing import List, Optional

from power_domains import __version__
from power_domains.config import Config, ConfigError

__all__ = ["main", "configure_logging"]


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="power-domains",
        description="Power domain declaration tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"power-domains {__version__}")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Show declared power domains")
    show_parser.add_argument("file", help="Declaration file (.toml, .yaml)")
    show_parser.add_argument("--format", choices=["table", "json"], default=None)

    check_parser = subparsers.add_parser("check", help="Validate domains and setpoints")
    check_parser.add_argument("file", help="Declaration file (.toml, .yaml)")

    pins_parser = subparsers.add_parser("pins", help="List the pins of a power domain")
    pins_parser.add_argument("file", help="Declaration file (.toml, .yaml)")
    pins_parser.add_argument("domain", help="Power domain id")
    pins_parser.add_argument("--format", choices=["table", "json"], default=None)

    # Arguments are parsed by power_domains.cli.config_cmd
    subparsers.add_parser("config", help="View/manage configuration", add_help=False)

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr at the requested verbosity."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for power-domains CLI."""
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] == "config":
        from power_domains.cli.config_cmd import main as config_main

        return config_main(argv[1:])

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = Config.load()
    except ConfigError as e:
        from power_domains.cli.utils import print_error

        print_error(e)
        return 1

    configure_logging(
        verbose=args.verbose or (config.defaults.verbose and not args.quiet),
        quiet=args.quiet or (config.defaults.quiet and not args.verbose),
    )

    if args.command == "show":
        from power_domains.cli.show_cmd import run_show

        return run_show(args.file, args.format or config.defaults.format, config)

    if args.command == "check":
        from power_domains.cli.check_cmd import run_check

        return run_check(args.file, config)

    if args.command == "pins":
        from power_domains.cli.pins_cmd import run_pins

        return run_pins(args.file, args.domain, args.format or config.defaults.format)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
