"""Command-line interface for crate-digest."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from digest.clipboard import copy_to_clipboard
from digest.explain import explain_build_errors
from digest.run import DigestOptions, run_digest
from selection.picker import QuestionaryPicker
from selection.store import JsonSelectionStore
from settings.config import ConfigError, load_config, write_default_config
from utils import EnvironmentFailure

COPIED_MESSAGE = (
    "Content copied to clipboard! "
    "You can now paste it into your favorite AI assistant."
)


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _add_config_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Config file (default: ~/.config/crate-digest/config.toml)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crate-digest",
        description="Dump your crate contents into a format which can be passed to GPT",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dump_parser = subparsers.add_parser("dump", help="Dump crate contents")
    _add_common_paths(dump_parser)
    _add_config_path(dump_parser)
    dump_parser.add_argument(
        "-f",
        "--functions",
        action="store_true",
        help="Use interactive mode to select functions/methods",
    )
    dump_parser.add_argument(
        "--only",
        action="store_true",
        help="Include only the selected functions (requires --functions)",
    )
    dump_parser.add_argument(
        "--all",
        dest="select_all",
        action="store_true",
        help="Select all functions and include README.md and Cargo.toml",
    )
    dump_parser.add_argument(
        "--readme", action="store_true", help="Include README.md files"
    )
    dump_parser.add_argument(
        "--toml", action="store_true", help="Include Cargo.toml files"
    )
    dump_parser.add_argument(
        "--print",
        dest="print_output",
        action="store_true",
        help="Write to stdout instead of the clipboard",
    )
    dump_parser.add_argument(
        "--history",
        default=None,
        help="Selection history file (default: ~/.config/crate-digest/history.json)",
    )

    explain_parser = subparsers.add_parser(
        "explain", help="Run cargo check and copy the errors as a prompt"
    )
    _add_common_paths(explain_parser)
    explain_parser.add_argument(
        "--context", default=None, help="Additional context to include"
    )

    init_parser = subparsers.add_parser(
        "init-config", help="Generate the default config file"
    )
    _add_config_path(init_parser)

    return parser


def _resolve_optional_path(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def _handle_dump(root: Path, args: argparse.Namespace) -> int:
    if args.only and not args.functions:
        sys.stderr.write("--only flag requires --functions flag\n")
        return 2

    config = load_config(_resolve_optional_path(args.config))
    history_path = _resolve_optional_path(args.history)
    store = (
        JsonSelectionStore(history_path)
        if history_path is not None
        else JsonSelectionStore.default()
    )
    options = DigestOptions(
        functions=args.functions,
        only=args.only,
        select_all=args.select_all,
        include_readme=args.readme,
        include_manifest=args.toml,
    )

    result = run_digest(root, options, config, store=store, picker=QuestionaryPicker())
    if result.status != "ok":
        sys.stderr.write(f"{result.message}\n")
        return 0

    if args.print_output:
        sys.stdout.write(f"{result.text}\n")
        return 0

    copy_to_clipboard(result.text)
    sys.stderr.write(f"{COPIED_MESSAGE}\n")
    return 0


def _handle_explain(root: Path, context: str | None) -> int:
    sys.stdout.write("Running cargo check...\n")
    explanation = explain_build_errors(root, context)
    if explanation is None:
        sys.stdout.write("No errors to explain! cargo check completed successfully.\n")
        return 0

    copy_to_clipboard(explanation.prompt)
    sys.stdout.write("Error output copied to clipboard!\n")
    sys.stdout.write("You can now paste it into your favorite AI assistant.\n")
    sys.stdout.write(f"\n--- Error Output ---\n{explanation.diagnostics}\n")
    return 0


def _handle_init_config(config: str | None) -> int:
    path = write_default_config(_resolve_optional_path(config))
    sys.stdout.write(f"Generated config file at: {path}\n")
    sys.stdout.write("You can edit this file to customize which files to include.\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "init-config":
            return _handle_init_config(args.config)

        root = Path(args.root).expanduser().resolve()

        if args.command == "dump":
            return _handle_dump(root, args)

        if args.command == "explain":
            return _handle_explain(root, args.context)
    except (ConfigError, EnvironmentFailure, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
