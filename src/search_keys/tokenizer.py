"""Split free text into tokens and pack token streams into one key component."""

from __future__ import annotations

from collections.abc import Iterable
import re
from typing import Any, Final

from search_keys.escaping import Escaper, get_default_escaper
from search_keys.splitting import split_unescaped


DEFAULT_WORD_SEPARATOR_PATTERN = r"[\|' \.,\-|(\n)]+"
DEFAULT_WORD_SEPARATOR: Final[re.Pattern[str]] = re.compile(DEFAULT_WORD_SEPARATOR_PATTERN)


class _Default:
    def __repr__(self) -> str:
        return "DEFAULT"


# Marks "separator not given" so None/False/"" can mean "do not split".
DEFAULT: Final[Any] = _Default()

Separator = str | re.Pattern[str] | bool | None


def validate_word_separator(
    word_separator: str | re.Pattern[str],
    token_separator: str,
    key_separator: str,
    escape_char: str,
) -> re.Pattern[str]:
    """Compile ``word_separator`` and reject patterns that can split inside an escape.

    A word boundary that matches one of the reserved characters would cut an
    escape sequence in two, so encoded streams would no longer split back
    into the same tokens.
    """
    pattern = _compile(word_separator)
    if not pattern.pattern:
        raise ValueError("word_separator must not be empty")
    for label, char in (
        ("token_separator", token_separator),
        ("key_separator", key_separator),
        ("escape_char", escape_char),
    ):
        if pattern.search(char):
            msg = f"word_separator {pattern.pattern!r} must not match the {label} {char!r}"
            raise ValueError(msg)
    return pattern


class KeyTokenizer:
    """Tokenizes text with a word-boundary pattern and encodes token streams."""

    def __init__(
        self,
        escaper: Escaper | None = None,
        word_separator: str | re.Pattern[str] = DEFAULT_WORD_SEPARATOR,
    ) -> None:
        self.escaper = escaper or get_default_escaper()
        self.token_separator = self.escaper.token_separator
        self.word_separator = validate_word_separator(
            word_separator,
            self.escaper.token_separator,
            self.escaper.key_separator,
            self.escaper.escape_char,
        )

    def tokenize(self, text: str, is_encoded: bool = False, separator: Separator = DEFAULT) -> list[str]:
        """Split ``text`` into tokens.

        Args:
            text: Raw text, or a stream produced by ``encode`` when ``is_encoded``.
            is_encoded: Split on unescaped token separators; ``separator`` is ignored.
            separator: Regex (string or compiled) to split on. Omit it (or pass
                True) for the word-boundary default; pass None, False or "" to
                keep ``text`` as a single token.
        """
        if is_encoded:
            return split_unescaped(text, self.token_separator, self.escaper.escape_char)
        pattern = self._resolve_separator(separator)
        if pattern is None:
            return [text]
        # Capture groups that did not take part in a match come back as None.
        return [token if token is not None else "" for token in pattern.split(text)]

    def encode(self, text: str, separator: Separator = DEFAULT) -> str:
        """Escape ``text``, split it into tokens and join them with the token separator.

        Raises ``ValueError`` when ``separator`` can match a reserved character.
        """
        pattern = self._resolve_separator(separator)
        if pattern is not None and pattern is not self.word_separator:
            validate_word_separator(
                pattern,
                self.escaper.token_separator,
                self.escaper.key_separator,
                self.escaper.escape_char,
            )
        return self.token_separator.join(self.tokenize(self.escaper.escape(text), False, pattern))

    def encode_tokens(self, tokens: Iterable[str]) -> str:
        """Escape already-split tokens and join them with the token separator."""
        return self.token_separator.join(self.escaper.escape(token) for token in tokens)

    def _resolve_separator(self, separator: Separator) -> re.Pattern[str] | None:
        if separator is DEFAULT or separator is True:
            return self.word_separator
        if separator is None or separator is False or separator == "":
            return None
        return _compile(separator)


def _compile(separator: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(separator, re.Pattern):
        return separator
    return re.compile(separator)


_DEFAULT_TOKENIZER = KeyTokenizer()


def get_default_tokenizer() -> KeyTokenizer:
    return _DEFAULT_TOKENIZER


def tokenize(text: str, is_encoded: bool = False, separator: Separator = DEFAULT) -> list[str]:
    return _DEFAULT_TOKENIZER.tokenize(text, is_encoded, separator)


def encode(text: str, separator: Separator = DEFAULT) -> str:
    return _DEFAULT_TOKENIZER.encode(text, separator)


def encode_tokens(tokens: Iterable[str]) -> str:
    return _DEFAULT_TOKENIZER.encode_tokens(tokens)
