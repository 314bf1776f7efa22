"""Unit tests for the search-keys command line tool."""

from __future__ import annotations

import json
import logging

import pytest

from search_keys.cli import build_argument_parser, main, run_command
from search_keys.codec import KeyCodec
from search_keys.escaping import KEY_SEPARATOR, TOKEN_SEPARATOR
from search_keys.keys import build_key, build_term_frequency_key


pytestmark = pytest.mark.unit

KS = KEY_SEPARATOR
TS = TOKEN_SEPARATOR


def _run(capsys: pytest.CaptureFixture[str], argv: list[str]) -> tuple[int, object]:
    exit_code = main(argv)
    out = capsys.readouterr().out
    return exit_code, json.loads(out) if out else None


def test_escape_and_unescape(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, ["escape", f"a\\{KS}"]) == (0, f"a\\\\\\{KS}")
    assert _run(capsys, ["unescape", f"a\\\\\\{KS}"]) == (0, f"a\\{KS}")


def test_build_and_break(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code, key = _run(capsys, ["build", "TF", "x", "y"])
    assert exit_code == 0
    assert key == build_key("TF", "x", "y")
    assert _run(capsys, ["break", key]) == (0, ["TF", "x", "y"])


def test_search_key_command(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code, key = _run(capsys, ["search-key", "TF", "f", "v", "--filter", "lang", "--filter-key", "en"])
    assert exit_code == 0
    assert key == f"TF{KS}f{KS}v{KS}lang{KS}en"


def test_parse_generic_and_search(capsys: pytest.CaptureFixture[str]) -> None:
    key = build_term_frequency_key("f", "v")
    assert _run(capsys, ["parse", key]) == (0, {"prefix": "TF", "parts": ["f", "v", "", ""]})

    exit_code, payload = _run(capsys, ["parse", key, "--search"])
    assert exit_code == 0
    assert payload == {"prefix": "TF", "field": "f", "value": "v", "filter": "", "filter_key": "", "trailing": []}


def test_has_prefix_exit_codes(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, ["has-prefix", build_key("TF", "x"), "TF"]) == (0, True)
    assert _run(capsys, ["has-prefix", build_key("TFX", "x"), "TF"]) == (1, False)


def test_tokenize_variants(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, ["tokenize", "a, b.c-d"]) == (0, ["a", "b", "c", "d"])
    assert _run(capsys, ["tokenize", "a, b", "--no-separator"]) == (0, ["a, b"])
    assert _run(capsys, ["tokenize", "a;b", "--separator", ";"]) == (0, ["a", "b"])
    assert _run(capsys, ["tokenize", f"a{TS}b", "--encoded"]) == (0, ["a", "b"])


def test_encode(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, ["encode", "hello, world"]) == (0, f"hello{TS}world")


def test_configured_separators(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_KEYS_KEY_SEPARATOR", ":")
    assert _run(capsys, ["build", "a:b", "c"]) == (0, "a\\:b:c")


def test_word_separator_matching_key_separator_returns_2(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SEARCH_KEYS_KEY_SEPARATOR", "|")
    assert main(["encode", "a|b"]) == 2
    assert capsys.readouterr().out == ""


def test_encode_rejects_separator_matching_reserved_character(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encode", "a b", "--separator", r"\W+"]) == 2
    assert capsys.readouterr().out == ""


def test_invalid_configuration_returns_2(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_KEYS_TOKEN_SEPARATOR", "ab")
    assert main(["escape", "x"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid configuration" in captured.err


def test_invalid_separator_pattern_returns_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["tokenize", "abc", "--separator", "["]) == 2
    assert capsys.readouterr().out == ""


def test_command_is_required() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_separator_flags_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        build_argument_parser().parse_args(["encode", "x", "--separator", ",", "--no-separator"])


def test_run_command_rejects_unknown_command() -> None:
    args = build_argument_parser().parse_args(["escape", "x"])
    args.command = "nope"
    with pytest.raises(ValueError, match="Unknown command"):
        run_command(KeyCodec(), args)


def test_log_level_flag_configures_root_logger(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "debug", "escape", "x"]) == 0
    assert logging.getLogger().level == logging.DEBUG
    assert json.loads(capsys.readouterr().out) == "x"
