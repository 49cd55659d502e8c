"""Command line interface for sorting and reconciling locale files."""

from __future__ import annotations

import argparse
import sys
import typing as t
from pathlib import Path
from typing import Self

from rich.console import Console
from rich.text import Text

from locale_keeper import config as config_mod
from locale_keeper.diff import integrity_report, sorting_diff
from locale_keeper.reconcile import compare, fix
from locale_keeper.serializer import serialize
from locale_keeper.sorter import sort_tree
from locale_keeper.store import LocaleStore, StoreError
from locale_keeper.tree import LocaleSet, MalformedTreeError, iter_paths, prune_empty
from locale_keeper.utils import configure_logging, logger

_Handler = t.Callable[[argparse.Namespace, list[str]], int]

MSG_SORTED = "All locales are sorted."
MSG_SORT_APPLIED = "Sort applied to {count} locale(s)."
MSG_CONSISTENT = "All locales share the same keys."
MSG_FIX_APPLIED = "Fix applied to {count} locale(s)."


class CliError(RuntimeError):
    """Raised when CLI arguments cannot be processed."""

    @classmethod
    def unrecognized_arguments(cls, extra: t.Sequence[str]) -> Self:
        joined = " ".join(extra)
        return cls(f"unrecognized arguments: {joined}")

    @classmethod
    def unsupported_command(cls, command: str) -> Self:
        return cls(f"unsupported command: {command}")

    @classmethod
    def no_locales(cls, directory: Path) -> Self:
        return cls(f"no locales found in {directory}")

    @classmethod
    def option_requires(cls, option: str, required: str) -> Self:
        return cls(f"{option} requires {required}")


def main(argv: t.Sequence[str] | None = None) -> int:
    """Parse *argv* and dispatch the requested command."""
    parser = _create_parser()
    try:
        args, extra = parser.parse_known_args(argv)
    except SystemExit as exc:  # pragma: no cover - argparse handles usage exits
        code = exc.code
        return code if isinstance(code, int) else 1

    try:
        handler = _resolve_handler(args.command)
        return handler(args, extra)
    except CliError as exc:
        _write_line(sys.stderr, str(exc))
        return 2
    except (StoreError, MalformedTreeError) as exc:
        _write_line(sys.stderr, f"Error: {exc}")
        return 1


def _resolve_handler(command: str) -> _Handler:
    handlers: dict[str, _Handler] = {
        "list": _handle_list,
        "sort": _handle_sort,
        "check": _handle_check,
    }
    try:
        return handlers[command]
    except KeyError as exc:
        raise CliError.unsupported_command(command) from exc


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locale-keeper",
        description="Sort locale JSON files and keep their keys in sync.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file to use instead of the per-user default.",
    )
    parser.add_argument(
        "--locales-dir",
        type=Path,
        help="Directory holding one <locale>.json file per locale.",
    )
    parser.add_argument(
        "--indent",
        help="Indentation written per level: 'tab' or a number of spaces.",
    )
    parser.add_argument(
        "--skip-empty",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat empty strings and empty objects as absent keys.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "list",
        help="List loaded locales.",
        description="List locales found in the locales directory.",
    )

    sort_parser = subparsers.add_parser(
        "sort",
        help="Show or apply alphabetical key order.",
        description=(
            "Show which keys move when every level is sorted alphabetically. "
            "Exits with 1 when a locale is not sorted."
        ),
    )
    sort_parser.add_argument(
        "--apply",
        action="store_true",
        help="Rewrite the locale files in sorted order.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Show or fix keys missing across locales.",
        description=(
            "Compare every locale with every other one. "
            "Exits with 1 when a locale lacks keys of another."
        ),
    )
    check_parser.add_argument(
        "--fix",
        action="store_true",
        help="Copy missing keys from the locales that have them.",
    )
    check_parser.add_argument(
        "--sort",
        action="store_true",
        help="Write fixed locales in sorted order (with --fix).",
    )

    return parser


def _settings(args: argparse.Namespace) -> dict:
    path = args.config if args.config is not None else config_mod.CONFIG_PATH
    cfg = config_mod.load_config_at(path)
    if args.locales_dir is not None:
        cfg["locales_dir"] = str(args.locales_dir)
    if args.indent is not None:
        cfg["indent"] = config_mod.normalise_indent(args.indent)
    if args.skip_empty is not None:
        cfg["skip_empty"] = args.skip_empty
    if args.log_level is not None:
        cfg["log_level"] = args.log_level
    return cfg


def _load(
    args: argparse.Namespace, extra: list[str]
) -> tuple[dict, LocaleStore, LocaleSet]:
    if extra:
        raise CliError.unrecognized_arguments(extra)
    cfg = _settings(args)
    configure_logging(str(cfg.get("log_level") or "INFO"))
    store = LocaleStore(cfg["locales_dir"])
    locales = store.load_locales()
    if not locales:
        raise CliError.no_locales(store.directory)
    if cfg["skip_empty"]:
        locales = {name: prune_empty(tree) for name, tree in locales.items()}
    return cfg, store, locales


def _handle_list(args: argparse.Namespace, extra: list[str]) -> int:
    _cfg, _store, locales = _load(args, extra)
    console = _console()
    for name, tree in locales.items():
        count = sum(1 for _ in iter_paths(tree))
        console.print(Text(f"{name} ({count} keys)"))
    return 0


def _handle_sort(args: argparse.Namespace, extra: list[str]) -> int:
    cfg, store, locales = _load(args, extra)
    sorted_locales = {name: sort_tree(tree) for name, tree in locales.items()}
    console = _console()

    if args.apply:
        documents = {
            name: serialize(entries, indent=cfg["indent"])
            for name, entries in sorted_locales.items()
        }
        store.write_locales(documents)
        console.print(Text(MSG_SORT_APPLIED.format(count=len(documents))))
        return 0

    pending = {
        name: diff
        for name, entries in sorted_locales.items()
        if (diff := sorting_diff(entries))
    }
    if not pending:
        console.print(Text(MSG_SORTED))
        return 0
    _print_sections(console, pending)
    logger.debug("%d locale(s) need sorting", len(pending))
    return 1


def _handle_check(args: argparse.Namespace, extra: list[str]) -> int:
    if args.sort and not args.fix:
        raise CliError.option_requires("--sort", "--fix")
    cfg, store, locales = _load(args, extra)
    console = _console()

    if args.fix:
        fixed = fix(locales)
        documents = {
            name: serialize(
                sort_tree(tree) if args.sort else tree, indent=cfg["indent"]
            )
            for name, tree in fixed.items()
        }
        store.write_locales(documents)
        console.print(Text(MSG_FIX_APPLIED.format(count=len(documents))))
        return 0

    report = integrity_report(compare(locales))
    if not report:
        console.print(Text(MSG_CONSISTENT))
        return 0
    _print_sections(console, report)
    return 1


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _print_sections(console: Console, sections: t.Mapping[str, list[str]]) -> None:
    for title, lines in sections.items():
        console.print(Text(title, style="bold"))
        for line in lines:
            console.print(Text(f"  {line}"))


def _write_line(stream: t.TextIO, text: str) -> None:
    stream.write(f"{text}\n")


__all__ = ["CliError", "main"]
