"""CLI entry-point for exit_guard.

Usage:
    python -m exit_guard run --config <file> [--policy forward|intercept] [--check] [--hard-exit]
    python -m exit_guard show-config <file> [--json]
    python -m exit_guard demo [--policy forward|intercept] [--code N ...]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from exit_guard import __version__
from exit_guard.core.config import ConfigError, read_config
from exit_guard.core.settings import settings
from exit_guard.guard import guarded
from exit_guard.model import ExitPolicy
from exit_guard.policy.exit_policy import parse_policy, policy_names
from exit_guard.utils.exit_codes import ExitCode

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="exit-guard",
        description="Intercept, log and optionally suppress process exits.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default=settings.LOG_LEVEL,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging threshold (default: $LOG_LEVEL or INFO).",
    )
    sub = p.add_subparsers(dest="command")

    # ── run subcommand ──────────────────────────────────────────────
    run_p = sub.add_parser(
        "run",
        help="Read a config file and start the server behind an exit guard.",
    )
    run_p.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        required=True,
        help="JSON or YAML configuration file.",
    )
    run_p.add_argument(
        "--policy",
        choices=policy_names(),
        default=None,
        help="Exit policy (default: the config file's exit_policy).",
    )
    run_p.add_argument(
        "--check",
        action="store_true",
        default=False,
        help="Build the app and exit without serving.",
    )
    run_p.add_argument(
        "--hard-exit",
        dest="hard_exit",
        action="store_true",
        default=False,
        help="Terminate with os._exit (skips atexit hooks).",
    )

    # ── show-config subcommand ──────────────────────────────────────
    show_p = sub.add_parser(
        "show-config",
        help="Read, validate and print a configuration file.",
    )
    show_p.add_argument("config_path", type=Path, help="JSON or YAML configuration file.")
    show_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the merged configuration as JSON to stdout.",
    )

    # ── demo subcommand ─────────────────────────────────────────────
    demo_p = sub.add_parser(
        "demo",
        help="Call sys.exit behind a guard and report what happened.",
    )
    demo_p.add_argument(
        "--policy",
        choices=policy_names(),
        default=ExitPolicy.INTERCEPT.value,
        help="Exit policy (default: intercept).",
    )
    demo_p.add_argument(
        "--code",
        dest="codes",
        type=int,
        action="append",
        default=None,
        help="Exit code to request; repeat for several calls (default: 7).",
    )

    p.set_defaults(command=None)
    return p


def _handle_run(args: argparse.Namespace) -> NoReturn:
    from exit_guard.core.runner import run

    # run() terminates through the real primitive and never returns.
    run(
        args.config_path,
        policy=args.policy,
        serve=not args.check,
        hard=args.hard_exit,
    )


def _handle_show_config(args: argparse.Namespace) -> int:
    try:
        config = read_config(args.config_path)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        print("An error occurred while reading the config file.", file=sys.stderr)
        return ExitCode.ERROR

    if args.json_out:
        json.dump(config.to_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    else:
        print("Config Contents:")
        for key, value in sorted(config.to_dict().items()):
            print(f"  {key}: {value}")
        print("Config file read successfully.")
    return ExitCode.SUCCESS


def _handle_demo(args: argparse.Namespace) -> int:
    codes = args.codes if args.codes else [7]
    with guarded(parse_policy(args.policy)) as guard:
        for code in codes:
            sys.exit(code)
        print("still running")
        recorded = [r.code for r in guard.requests]
    print(f"intercepted: {' '.join(str(c) for c in recorded)}")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point: returns an exit code (0 = success, 1 = failure, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=_LOG_FORMAT)

    if args.command == "run":
        return _handle_run(args)

    if args.command == "show-config":
        return _handle_show_config(args)

    if args.command == "demo":
        return _handle_demo(args)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
