"""
Reversible key encoding for search index stores.

This package builds and parses the composite keys an index store writes:
- escaping: escape/unescape of the token and key separators
- splitting: split on separators that are not escaped
- keys: generic and search key builders and parsers (TF, RI, FI families)
- tokenizer: split free text into tokens and encode token streams
- analyzers: token pipelines (tokenizer + filters) feeding the encoder
- codec: one configured bundle of all of the above
"""

from search_keys.escaping import ESCAPE_CHAR, KEY_SEPARATOR, TOKEN_SEPARATOR, Escaper, escape, unescape
from search_keys.keys import (
    FIELD_INFO_PREFIX,
    REVERSE_INDEX_PREFIX,
    TERM_FREQUENCY_PREFIX,
    KeyBuilder,
    ParsedKey,
    SearchKey,
    break_key,
    build_field_info_key,
    build_key,
    build_reverse_index_key,
    build_search_key,
    build_term_frequency_key,
    key_has_prefix,
    parse_key,
    parse_search_key,
)
from search_keys.splitting import split_unescaped
from search_keys.tokenizer import DEFAULT_WORD_SEPARATOR, KeyTokenizer, encode, encode_tokens, tokenize


__all__ = [
    "DEFAULT_WORD_SEPARATOR",
    "ESCAPE_CHAR",
    "FIELD_INFO_PREFIX",
    "KEY_SEPARATOR",
    "REVERSE_INDEX_PREFIX",
    "TERM_FREQUENCY_PREFIX",
    "TOKEN_SEPARATOR",
    "Escaper",
    "KeyBuilder",
    "KeyTokenizer",
    "ParsedKey",
    "SearchKey",
    "break_key",
    "build_field_info_key",
    "build_key",
    "build_reverse_index_key",
    "build_search_key",
    "build_term_frequency_key",
    "encode",
    "encode_tokens",
    "escape",
    "key_has_prefix",
    "parse_key",
    "parse_search_key",
    "split_unescaped",
    "tokenize",
    "unescape",
]
