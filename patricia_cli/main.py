"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m patricia_cli build ENTRIES --out STORE [--routing hashed|raw] [--hash ALG] [--json]
    python -m patricia_cli get STORE KEY [--json]
    python -m patricia_cli root STORE [--json]
    python -m patricia_cli inspect STORE
    python -m patricia_cli verify STORE [--json]
    python -m patricia_cli config --init

Environment Variables:
    PATRICIA_HASH_ALGORITHM     Hash algorithm for new tries (default: sha256)
    PATRICIA_ROUTING            Routing mode for new tries (default: hashed)
    PATRICIA_LOG_LEVEL          Log level (default: INFO)
    PATRICIA_LOG_FILE           Also write logs to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from patricia.crypto.hashing import HASH_FUNCTIONS
from patricia_cli import __version__
from patricia_cli.commands import build, query, verify
from patricia_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from patricia_cli.config import DEFAULT_CONFIG_NAME, get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="patricia",
        description="Patricia CLI - Build, query and verify Merkle-Patricia tries.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_NAME} or ~/.config/patricia/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a trie from a JSON entries file",
        description="Insert every entry of a JSON object into a new trie and commit it to a store.",
    )
    build_parser.add_argument(
        "entries",
        type=str,
        help="JSON file mapping keys to values (0x-prefixed strings are hex)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        required=True,
        help="Output path for the JSON node store",
    )
    build_parser.add_argument(
        "--routing",
        type=str,
        choices=["hashed", "raw"],
        default=None,
        help="Routing mode (default: from config, hashed)",
    )
    build_parser.add_argument(
        "--hash",
        type=str,
        choices=sorted(HASH_FUNCTIONS),
        default=None,
        help="Hash algorithm (default: from config, sha256)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- get command ---
    get_parser = subparsers.add_parser(
        "get",
        help="Look up a key in a committed trie",
    )
    get_parser.add_argument("store", type=str, help="Path to the JSON node store")
    get_parser.add_argument("key", type=str, help="Key (0x-prefixed strings are hex)")
    get_parser.add_argument("--json", action="store_true", help="JSON output")
    get_parser.set_defaults(func=query.get_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Show the root digest and size of a committed trie",
    )
    root_parser.add_argument("store", type=str, help="Path to the JSON node store")
    root_parser.add_argument("--json", action="store_true", help="JSON output")
    root_parser.set_defaults(func=query.root_cmd)

    # --- inspect command ---
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print a committed trie as a tree",
    )
    inspect_parser.add_argument("store", type=str, help="Path to the JSON node store")
    inspect_parser.set_defaults(func=query.inspect_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify record integrity and structure of a committed trie",
        description="Recompute every digest and size and check branch minimality.",
    )
    verify_parser.add_argument("store", type=str, help="Path to the JSON node store")
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (PATRICIA_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: patricia config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(
        level=args.log_level or config.logging.level,
        log_file=config.logging.log_file,
    )

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
