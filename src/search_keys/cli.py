"""CLI for building, inspecting and tokenizing index keys."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import re
import sys
from typing import Any

import orjson

from search_keys.codec import KeyCodec
from search_keys.config import Settings
from search_keys.observability.logging import configure_logging
from search_keys.tokenizer import DEFAULT


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="search-keys",
        description="Build, break and tokenize search index keys",
    )
    parser.add_argument("--log-level", help="Override SEARCH_KEYS_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    escape_parser = subparsers.add_parser("escape", help="Escape text for use as a key component")
    escape_parser.add_argument("text")

    unescape_parser = subparsers.add_parser("unescape", help="Reverse escape")
    unescape_parser.add_argument("text")

    build_parser = subparsers.add_parser("build", help="Build a key from components")
    build_parser.add_argument("components", nargs="+", metavar="COMPONENT")

    search_parser = subparsers.add_parser("search-key", help="Build a five-component search key")
    search_parser.add_argument("prefix")
    search_parser.add_argument("field")
    search_parser.add_argument("value")
    search_parser.add_argument("--filter", default=None)
    search_parser.add_argument("--filter-key", default=None)

    break_parser = subparsers.add_parser("break", help="Break a key into unescaped components")
    break_parser.add_argument("key")

    parse_parser = subparsers.add_parser("parse", help="Describe a key")
    parse_parser.add_argument("key")
    parse_parser.add_argument("--search", action="store_true", help="Parse as a search index key")

    prefix_parser = subparsers.add_parser("has-prefix", help="Exit 0 when KEY has PREFIX, 1 otherwise")
    prefix_parser.add_argument("key")
    prefix_parser.add_argument("prefix")

    tokenize_parser = subparsers.add_parser("tokenize", help="Split text into tokens")
    tokenize_parser.add_argument("text")
    tokenize_parser.add_argument("--encoded", action="store_true", help="TEXT was produced by encode")
    _add_separator_arguments(tokenize_parser)

    encode_parser = subparsers.add_parser("encode", help="Escape and tokenize text into one component")
    encode_parser.add_argument("text")
    _add_separator_arguments(encode_parser)

    return parser


def _add_separator_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--separator", help="Regex to split on (default: configured word separator)")
    group.add_argument("--no-separator", action="store_true", help="Keep the text as a single token")


def _resolve_separator(args: argparse.Namespace) -> Any:
    if args.no_separator:
        return None
    if args.separator is not None:
        return args.separator
    return DEFAULT


def run_command(codec: KeyCodec, args: argparse.Namespace) -> tuple[Any, int]:
    """Execute one subcommand and return its JSON payload with the exit code."""

    command = args.command
    if command == "escape":
        return codec.escape(args.text), 0
    if command == "unescape":
        return codec.unescape(args.text), 0
    if command == "build":
        return codec.build_key(args.components), 0
    if command == "search-key":
        return codec.build_search_key(args.prefix, args.field, args.value, args.filter, args.filter_key), 0
    if command == "break":
        return codec.break_key(args.key), 0
    if command == "parse":
        parsed = codec.parse_search_key(args.key) if args.search else codec.parse_key(args.key)
        return parsed.to_dict(), 0
    if command == "has-prefix":
        matched = codec.key_has_prefix(args.key, args.prefix)
        return matched, 0 if matched else 1
    if command == "tokenize":
        return codec.tokenize(args.text, args.encoded, _resolve_separator(args)), 0
    if command == "encode":
        return codec.encode(args.text, _resolve_separator(args)), 0
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValueError as exc:
        configure_logging("WARNING", json_output=False)
        logger.error("Invalid configuration: %s", exc)
        return 2

    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json)

    try:
        codec = KeyCodec.from_settings(settings)
        payload, exit_code = run_command(codec, args)
    except (ValueError, re.error) as exc:
        logger.error("%s", exc)
        return 2

    sys.stdout.write(orjson.dumps(payload).decode("utf-8") + "\n")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
