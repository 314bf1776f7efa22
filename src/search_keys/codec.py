"""One configured bundle of escaper, key builder and tokenizer.

Stores that keep the default separators can use the module-level functions
in ``search_keys`` directly. A ``KeyCodec`` is for stores that configure
their own separators or word boundary through ``Settings``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
import re

from search_keys.analyzers import Analyzer, encode_analyzed, get_analyzer
from search_keys.config import Settings
from search_keys.escaping import ESCAPE_CHAR, KEY_SEPARATOR, TOKEN_SEPARATOR, Escaper
from search_keys.keys import KeyBuilder, ParsedKey, SearchKey
from search_keys.splitting import split_unescaped
from search_keys.tokenizer import DEFAULT, DEFAULT_WORD_SEPARATOR, KeyTokenizer, Separator


logger = logging.getLogger(__name__)


class KeyCodec:
    """Builds, breaks and tokenizes keys for a single separator configuration."""

    def __init__(
        self,
        *,
        token_separator: str = TOKEN_SEPARATOR,
        key_separator: str = KEY_SEPARATOR,
        escape_char: str = ESCAPE_CHAR,
        word_separator: str | re.Pattern[str] = DEFAULT_WORD_SEPARATOR,
        analyzer_name: str | None = None,
    ) -> None:
        self.escaper = Escaper(token_separator, key_separator, escape_char)
        self.builder = KeyBuilder(self.escaper)
        self.tokenizer = KeyTokenizer(self.escaper, word_separator)
        self.analyzer: Analyzer = get_analyzer(analyzer_name, self.tokenizer.word_separator)
        logger.debug(
            "Configured key codec",
            extra={
                "token_separator": token_separator,
                "key_separator": key_separator,
                "word_separator": self.tokenizer.word_separator.pattern,
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> KeyCodec:
        settings = settings or Settings()
        return cls(
            token_separator=settings.token_separator,
            key_separator=settings.key_separator,
            escape_char=settings.escape_char,
            word_separator=settings.get_word_separator_pattern(),
            analyzer_name=settings.analyzer,
        )

    @property
    def token_separator(self) -> str:
        return self.escaper.token_separator

    @property
    def key_separator(self) -> str:
        return self.escaper.key_separator

    # Escaping

    def escape(self, text: str) -> str:
        return self.escaper.escape(text)

    def unescape(self, text: str) -> str:
        return self.escaper.unescape(text)

    def split_unescaped(self, text: str, separator: str) -> list[str]:
        return split_unescaped(text, separator, self.escaper.escape_char)

    # Keys

    def build_key(self, *components: str | Sequence[str]) -> str:
        return self.builder.build_key(*components)

    def build_search_key(
        self,
        prefix: str,
        field: str,
        value: str,
        filter: str | None = None,
        filter_key: str | None = None,
    ) -> str:
        return self.builder.build_search_key(prefix, field, value, filter, filter_key)

    def build_term_frequency_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.builder.build_term_frequency_key(field, value, filter, filter_key)

    def build_reverse_index_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.builder.build_reverse_index_key(field, value, filter, filter_key)

    def build_field_info_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.builder.build_field_info_key(field, value, filter, filter_key)

    def break_key(self, key: str) -> list[str]:
        return self.builder.break_key(key)

    def parse_key(self, key: str) -> ParsedKey:
        return self.builder.parse_key(key)

    def parse_search_key(self, key: str) -> SearchKey:
        return self.builder.parse_search_key(key)

    def key_has_prefix(self, key: str, prefix: str) -> bool:
        return self.builder.key_has_prefix(key, prefix)

    # Tokens

    def tokenize(self, text: str, is_encoded: bool = False, separator: Separator = DEFAULT) -> list[str]:
        return self.tokenizer.tokenize(text, is_encoded, separator)

    def encode(self, text: str, separator: Separator = DEFAULT) -> str:
        return self.tokenizer.encode(text, separator)

    def encode_tokens(self, tokens: Iterable[str]) -> str:
        return self.tokenizer.encode_tokens(tokens)

    def encode_analyzed(self, text: str) -> str:
        """Encode ``text`` through the configured analyzer."""
        return encode_analyzed(text, self.analyzer, self.tokenizer)


_DEFAULT_CODEC = KeyCodec()


def get_default_codec() -> KeyCodec:
    """Return the process-wide codec built from the built-in defaults."""
    return _DEFAULT_CODEC
