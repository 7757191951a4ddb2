import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from . import storage
from .compactor import table_stats
from .config import load_settings
from .models import CodeWords, ConfigurationError
from .pipeline import build_table
from .tree_builder import generate_code


def _load_table(args: argparse.Namespace):
    try:
        data = storage.load_translate_data(args.data)
        code_words = storage.load_code_words(args.code_words) if args.code_words else CodeWords()
        return build_table(data, code_words)
    except ConfigurationError as e:
        raise SystemExit(f"invalid category: {e}")
    except ValueError as e:
        raise SystemExit(f"invalid input: {e}")


def _write(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.buffer.write((text + "\n").encode("utf-8"))
    else:
        storage.save_code(text, output)
        logging.info("wrote %s", output)


def compact(args: argparse.Namespace) -> None:
    """Write the compact table as JSON."""

    table = _load_table(args)
    if args.output:
        storage.save_table(table, args.output)
        logging.info("wrote %s", args.output)
    else:
        _write(json.dumps(table, ensure_ascii=False, indent=2), None)


def generate(args: argparse.Namespace) -> None:
    """Write the compact table as JavaScript source."""

    settings = load_settings()
    table = _load_table(args)
    _write(generate_code(table, indent=settings.indent, quotes=settings.quotes), args.output)


def stats(args: argparse.Namespace) -> None:
    """Show statistics about a stored table."""

    try:
        table = storage.load_table(args.input)
        result = table_stats(table)
    except ValueError as e:
        raise SystemExit(f"invalid table: {e}")

    print(f"Languages: {result.languages}")
    print(f"Categories: {result.categories}")
    print(f"Words: {result.words}")
    print(f"Untranslated: {result.placeholders}")
    print(f"Back-references: {result.back_references}")


def main(argv: List[str] | None = None) -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Translation table compaction")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func, help_text in (
        ("compact", compact, "write the compact table as JSON"),
        ("generate", generate, "write the compact table as JavaScript"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("data", type=Path, help="per-language translation results (JSON)")
        p.add_argument(
            "--code-words",
            type=Path,
            default=None,
            help="words referenced in code (JSON); untranslated ones become comments",
        )
        p.add_argument(
            "--output",
            type=Path,
            default=None,
            help="write result to this file instead of stdout",
        )
        p.set_defaults(func=func)

    p = sub.add_parser("stats", help="show statistics of a compact table")
    p.add_argument("input", type=Path)
    p.set_defaults(func=stats)

    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity")
    parser.add_argument("--log-file", type=Path, default=None, help="write logs to this file")

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if args.log_file:
        handlers.append(logging.FileHandler(args.log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", handlers=handlers)

    args.func(args)


if __name__ == "__main__":
    main()
