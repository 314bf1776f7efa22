"""Reversible escaping of the private separator characters.

Every component placed in a key is escaped so the token and key separators
can never appear unescaped inside it. The escape character doubles itself
first, otherwise the escape inserted in front of a separator would need
escaping in turn. Unescaping walks the same steps backwards.
"""

from __future__ import annotations


TOKEN_SEPARATOR = "\uffed"  # ￭
KEY_SEPARATOR = "\uffee"  # ￮
ESCAPE_CHAR = "\\"


class Escaper:
    """Escape scheme for one pair of separator characters."""

    def __init__(
        self,
        token_separator: str = TOKEN_SEPARATOR,
        key_separator: str = KEY_SEPARATOR,
        escape_char: str = ESCAPE_CHAR,
    ) -> None:
        validate_separators(token_separator, key_separator, escape_char)
        self.token_separator = token_separator
        self.key_separator = key_separator
        self.escape_char = escape_char
        self._escaped_escape = escape_char + escape_char
        self._escaped_token_separator = escape_char + token_separator
        self._escaped_key_separator = escape_char + key_separator

    def escape(self, text: str) -> str:
        """Escape the escape character and both separators. Reverse with ``unescape``."""
        return (
            text.replace(self.escape_char, self._escaped_escape)
            .replace(self.token_separator, self._escaped_token_separator)
            .replace(self.key_separator, self._escaped_key_separator)
        )

    def unescape(self, text: str) -> str:
        """Undo ``escape``."""
        return (
            text.replace(self._escaped_token_separator, self.token_separator)
            .replace(self._escaped_key_separator, self.key_separator)
            .replace(self._escaped_escape, self.escape_char)
        )

    def __repr__(self) -> str:
        return (
            f"Escaper(token_separator={self.token_separator!r}, "
            f"key_separator={self.key_separator!r}, escape_char={self.escape_char!r})"
        )


def validate_separators(token_separator: str, key_separator: str, escape_char: str) -> None:
    """Raise ``ValueError`` unless the three characters are single and pairwise distinct."""

    for label, value in (
        ("token_separator", token_separator),
        ("key_separator", key_separator),
        ("escape_char", escape_char),
    ):
        if not isinstance(value, str) or len(value) != 1:
            msg = f"{label} must be exactly one character, got {value!r}"
            raise ValueError(msg)
    if len({token_separator, key_separator, escape_char}) != 3:
        msg = (
            "token_separator, key_separator and escape_char must be distinct, got "
            f"{token_separator!r}, {key_separator!r}, {escape_char!r}"
        )
        raise ValueError(msg)


_DEFAULT_ESCAPER = Escaper()


def get_default_escaper() -> Escaper:
    return _DEFAULT_ESCAPER


def escape(text: str) -> str:
    """Escape ``text`` with the default separators."""
    return _DEFAULT_ESCAPER.escape(text)


def unescape(text: str) -> str:
    """Unescape ``text`` produced by ``escape``."""
    return _DEFAULT_ESCAPER.unescape(text)
