"""Split strings on separators that are not escaped.

A separator counts as escaped when the run of escape characters directly in
front of it has odd length; an even run is made of escaped escape
characters, which cancel pairwise. The scan walks left to right and only
remembers the parity of the current run.
"""

from __future__ import annotations

from collections.abc import Iterator

from search_keys.escaping import ESCAPE_CHAR


def has_escaped_separator(text: str, separator: str, escape_char: str = ESCAPE_CHAR) -> bool:
    """Return True when ``text`` contains ``escape_char`` directly before ``separator``."""
    return (escape_char + separator) in text


def iter_split_unescaped(text: str, separator: str, escape_char: str = ESCAPE_CHAR) -> Iterator[str]:
    """Yield the fragments of ``text`` between unescaped ``separator`` occurrences.

    Fragments are returned as-is, escapes included.
    """

    if not separator:
        raise ValueError("empty separator")
    if separator.startswith(escape_char):
        msg = f"separator {separator!r} must not start with the escape character {escape_char!r}"
        raise ValueError(msg)

    if not has_escaped_separator(text, separator, escape_char):
        yield from text.split(separator)
        return

    start = 0
    index = 0
    escaped = False
    length = len(text)
    width = len(separator)
    while index < length:
        char = text[index]
        if char == escape_char:
            escaped = not escaped
            index += 1
            continue
        if not escaped and text.startswith(separator, index):
            yield text[start:index]
            index += width
            start = index
            continue
        escaped = False
        index += 1
    yield text[start:]


def split_unescaped(text: str, separator: str, escape_char: str = ESCAPE_CHAR) -> list[str]:
    """Split ``text`` on every ``separator`` not preceded by an odd run of escape characters."""
    return list(iter_split_unescaped(text, separator, escape_char))
