"""Unified CLI entry point for streamscribe.

    streamscribe show {client,server} [--config PATH]
    streamscribe set PATH KEY VALUE
    streamscribe vad-threshold PATH VALUE

The default config path comes from ``STREAMSCRIBE_CONFIG`` (a ``.env`` file
in the working directory is honoured) and falls back to ``config.yaml``.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from streamscribe import __version__
from streamscribe.bootstrap import ROLES, load_or_default
from streamscribe.config import set_config_key, update_vad_threshold
from streamscribe.errors import ConfigError

CONFIG_ENV_VAR = "STREAMSCRIBE_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"


def _default_config_path() -> str:
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with all subcommands.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="streamscribe",
        description="Inspect and edit streaming transcription configuration",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # -- show ----------------------------------------------------------------
    show_parser = subparsers.add_parser(
        "show", help="Print the effective configuration, defaults applied"
    )
    show_parser.add_argument("role", choices=ROLES)
    show_parser.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})",
    )

    # -- set -----------------------------------------------------------------
    set_parser = subparsers.add_parser("set", help="Set a dotted key in a config file")
    set_parser.add_argument("path")
    set_parser.add_argument("key", help='Dot-separated key, e.g. "audio.sample_rate"')
    set_parser.add_argument("value", help="Value encoded as a YAML scalar")

    # -- vad-threshold -------------------------------------------------------
    vad_parser = subparsers.add_parser(
        "vad-threshold", help="Store a calibrated VAD energy threshold"
    )
    vad_parser.add_argument("path")
    vad_parser.add_argument("threshold", type=float)

    return parser


def _show(role: str, config_path: Optional[str], console: Console) -> None:
    path = Path(config_path or _default_config_path())
    if not path.exists():
        console.print(
            f"[yellow]{escape(str(path))} not found, showing defaults[/yellow]"
        )
    config = load_or_default(role, path)
    sys.stdout.write(
        yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and dispatch to the matching command."""
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    console = Console(stderr=True)

    try:
        if args.command == "show":
            _show(args.role, args.config, console)

        elif args.command == "set":
            path = set_config_key(args.path, args.key, args.value)
            console.print(
                f"[green]Updated {escape(args.key)} in {escape(str(path))}[/green]"
            )

        elif args.command == "vad-threshold":
            path = update_vad_threshold(args.path, args.threshold)
            console.print(
                f"[green]Saved VAD energy threshold {args.threshold} "
                f"to {escape(str(path))}[/green]"
            )
    except (ConfigError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        sys.exit(1)


if __name__ == "__main__":
    main()
