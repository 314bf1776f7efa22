"""Build and break composite index keys.

A key is a list of string components, each escaped and joined by the key
separator. Search keys always carry five components::

    prefix, field, value, filter, filter_key

The key families used by the index store are told apart by their prefix:
term frequency (``TF``), reverse index (``RI``) and field info (``FI``).

Parsing never fails. Keys that were built by hand or by another writer
simply come back with missing fields (``None``) or extra ``trailing``
components, so the store can still inspect them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from search_keys.escaping import Escaper, get_default_escaper
from search_keys.splitting import split_unescaped


logger = logging.getLogger(__name__)

TERM_FREQUENCY_PREFIX = "TF"
REVERSE_INDEX_PREFIX = "RI"
FIELD_INFO_PREFIX = "FI"

SEARCH_KEY_WIDTH = 5


@dataclass(frozen=True, slots=True)
class ParsedKey:
    """Generic key split into its prefix and remaining components."""

    prefix: str
    parts: tuple[str, ...] = ()

    def to_key(self, builder: KeyBuilder | None = None) -> str:
        return (builder or _DEFAULT_BUILDER).build_key([self.prefix, *self.parts])

    def to_dict(self) -> dict[str, Any]:
        return {"prefix": self.prefix, "parts": list(self.parts)}


@dataclass(frozen=True, slots=True)
class SearchKey:
    """Search index key broken into its named components.

    Named fields are ``None`` when the key had too few components. Anything
    past the fifth component lands in ``trailing``.
    """

    prefix: str | None
    field: str | None = None
    value: str | None = None
    filter: str | None = None
    filter_key: str | None = None
    trailing: tuple[str, ...] = ()

    @property
    def is_well_formed(self) -> bool:
        named = (self.prefix, self.field, self.value, self.filter, self.filter_key)
        return all(part is not None for part in named) and not self.trailing

    def components(self) -> list[str]:
        named = [self.prefix, self.field, self.value, self.filter, self.filter_key]
        present = [part for part in named if part is not None]
        return [*present, *self.trailing]

    def to_key(self, builder: KeyBuilder | None = None) -> str:
        """Rebuild the key string, trailing components included."""
        return (builder or _DEFAULT_BUILDER).build_key(self.components())

    def to_dict(self) -> dict[str, Any]:
        return {
            "prefix": self.prefix,
            "field": self.field,
            "value": self.value,
            "filter": self.filter,
            "filter_key": self.filter_key,
            "trailing": list(self.trailing),
        }


class KeyBuilder:
    """Builds and parses keys for one escape scheme."""

    def __init__(self, escaper: Escaper | None = None) -> None:
        self.escaper = escaper or get_default_escaper()
        self.key_separator = self.escaper.key_separator

    def build_key(self, *components: str | Sequence[str]) -> str:
        """Escape each component and join them with the key separator.

        Components can be passed as one list/tuple or as separate arguments.
        """
        parts = _flatten_components(components)
        return self.key_separator.join(self.escaper.escape(part) for part in parts)

    def build_search_key(
        self,
        prefix: str,
        field: str,
        value: str,
        filter: str | None = None,
        filter_key: str | None = None,
    ) -> str:
        return self.build_key([prefix, field, value, filter or "", filter_key or ""])

    def build_term_frequency_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.build_search_key(TERM_FREQUENCY_PREFIX, field, value, filter, filter_key)

    def build_reverse_index_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.build_search_key(REVERSE_INDEX_PREFIX, field, value, filter, filter_key)

    def build_field_info_key(
        self, field: str, value: str, filter: str | None = None, filter_key: str | None = None
    ) -> str:
        return self.build_search_key(FIELD_INFO_PREFIX, field, value, filter, filter_key)

    def break_key(self, key: str) -> list[str]:
        """Split ``key`` on unescaped key separators and unescape each component."""
        pieces = split_unescaped(key, self.key_separator, self.escaper.escape_char)
        return [self.escaper.unescape(piece) for piece in pieces]

    def parse_key(self, key: str) -> ParsedKey:
        prefix, *parts = self.break_key(key)
        return ParsedKey(prefix=prefix, parts=tuple(parts))

    def parse_search_key(self, key: str) -> SearchKey:
        parts = self.break_key(key)
        if len(parts) != SEARCH_KEY_WIDTH:
            logger.debug("Search key has %d components, expected %d", len(parts), SEARCH_KEY_WIDTH)
        named: list[str | None] = [*parts[:SEARCH_KEY_WIDTH]]
        named.extend([None] * (SEARCH_KEY_WIDTH - len(named)))
        return SearchKey(
            prefix=named[0],
            field=named[1],
            value=named[2],
            filter=named[3],
            filter_key=named[4],
            trailing=tuple(parts[SEARCH_KEY_WIDTH:]),
        )

    def key_has_prefix(self, key: str, prefix: str) -> bool:
        """Return True if ``key`` starts with ``prefix`` followed by the key separator."""
        expected = self.escaper.escape(prefix) + self.key_separator
        return key[: len(expected)] == expected


def _flatten_components(components: tuple[str | Sequence[str], ...]) -> list[str]:
    if len(components) == 1 and isinstance(components[0], (list, tuple)):
        return list(components[0])
    return list(components)  # type: ignore[arg-type]


_DEFAULT_BUILDER = KeyBuilder()


def get_default_builder() -> KeyBuilder:
    return _DEFAULT_BUILDER


def build_key(*components: str | Sequence[str]) -> str:
    return _DEFAULT_BUILDER.build_key(*components)


def build_search_key(
    prefix: str,
    field: str,
    value: str,
    filter: str | None = None,
    filter_key: str | None = None,
) -> str:
    return _DEFAULT_BUILDER.build_search_key(prefix, field, value, filter, filter_key)


def build_term_frequency_key(
    field: str, value: str, filter: str | None = None, filter_key: str | None = None
) -> str:
    return _DEFAULT_BUILDER.build_term_frequency_key(field, value, filter, filter_key)


def build_reverse_index_key(
    field: str, value: str, filter: str | None = None, filter_key: str | None = None
) -> str:
    return _DEFAULT_BUILDER.build_reverse_index_key(field, value, filter, filter_key)


def build_field_info_key(
    field: str, value: str, filter: str | None = None, filter_key: str | None = None
) -> str:
    return _DEFAULT_BUILDER.build_field_info_key(field, value, filter, filter_key)


def break_key(key: str) -> list[str]:
    return _DEFAULT_BUILDER.break_key(key)


def parse_key(key: str) -> ParsedKey:
    return _DEFAULT_BUILDER.parse_key(key)


def parse_search_key(key: str) -> SearchKey:
    return _DEFAULT_BUILDER.parse_search_key(key)


def key_has_prefix(key: str, prefix: str) -> bool:
    return _DEFAULT_BUILDER.key_has_prefix(key, prefix)
