"""CLI entrypoint for dispatching console commands in a sub process."""

from __future__ import annotations

import argparse
import logging
import sys

from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from subdispatch.configuration import DispatcherSettings, load_settings
from subdispatch.dispatcher import CommandDispatcher
from subdispatch.exceptions import (
    InterpreterNotFoundError,
    SubProcessFailedError,
    WrongContextError,
)
from subdispatch.logging import setup_file_logger
from subdispatch.runtime.paths import console_binary_path

DEFAULT_CONFIG_PATH = Path("subdispatch.yaml")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a console command in an isolated sub process."
    )
    parser.add_argument("command", type=str, help="Command identifier.")
    parser.add_argument(
        "arguments",
        nargs="*",
        help="Positional arguments passed to the command.",
    )
    parser.add_argument(
        "--arg",
        action="append",
        dest="named",
        default=[],
        metavar="NAME=VALUE",
        help=(
            "Named argument; camelCase names are converted to "
            "--dashed-flags."
        ),
    )
    parser.add_argument(
        "--env",
        action="append",
        dest="env",
        default=[],
        metavar="KEY=VALUE",
        help="Environment variable for this command only.",
    )
    parser.add_argument(
        "--executable",
        type=str,
        help="Absolute path to the console binary.",
    )
    parser.add_argument(
        "--prefix",
        action="append",
        dest="prefix",
        default=[],
        help="Token inserted between the binary and the command.",
    )
    parser.add_argument(
        "--plugin-run",
        action="store_true",
        help="Dispatch the way a package manager plugin hook does.",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Forward this process' standard input to the command.",
    )
    parser.add_argument(
        "--config",
        type=str,
        help=(
            "Path to a YAML config. If omitted, uses subdispatch.yaml "
            "when present."
        ),
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write debug logs to this rotating log file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _parse_pairs(
    pairs: List[str], parser: argparse.ArgumentParser, option: str
) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            parser.error(f"{option} expects KEY=VALUE, got '{pair}'")
        parsed[key] = value
    return parsed


def _load_settings(config: Optional[str]) -> DispatcherSettings:
    if config:
        return load_settings(Path(config))
    if DEFAULT_CONFIG_PATH.exists():
        return load_settings(DEFAULT_CONFIG_PATH)
    return DispatcherSettings()


def _build_dispatcher(
    args: argparse.Namespace, settings: DispatcherSettings
) -> CommandDispatcher:
    if args.plugin_run:
        return CommandDispatcher.create_from_plugin_run(
            args.prefix, settings=settings
        )
    executable = args.executable or console_binary_path(
        settings.install_root, settings.command_name
    )
    return CommandDispatcher.create(
        executable, args.prefix, settings=settings
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if args.log_file:
        setup_file_logger(Path(args.log_file))

    env = _parse_pairs(args.env, parser, "--env")
    arguments: Dict[Any, Any] = dict(enumerate(args.arguments))
    arguments.update(_parse_pairs(args.named, parser, "--arg"))

    try:
        settings = _load_settings(args.config)
        dispatcher = _build_dispatcher(args, settings)
    except (
        FileNotFoundError,
        WrongContextError,
        InterpreterNotFoundError,
    ) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        output = dispatcher.execute_command(
            args.command,
            arguments,
            env,
            sys.stdin if args.stdin else None,
        )
    except SubProcessFailedError as exc:
        print(str(exc), file=sys.stderr)
        return exc.exit_code if exc.exit_code > 0 else 1
    if output:
        print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
