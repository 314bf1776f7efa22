"""Centralized configuration for search-keys using Pydantic Settings."""

import re

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from search_keys.analyzers import available_analyzers
from search_keys.escaping import ESCAPE_CHAR, KEY_SEPARATOR, TOKEN_SEPARATOR, validate_separators
from search_keys.tokenizer import DEFAULT_WORD_SEPARATOR_PATTERN, validate_word_separator


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``SEARCH_KEYS_*`` environment variables.

    The separators are part of the on-disk key format. Changing them makes
    keys written under the old values unreadable, so they are only meant to
    be set once per store.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_KEYS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Key format
    token_separator: str = Field(default=TOKEN_SEPARATOR, description="Character joining tokens inside a component")
    key_separator: str = Field(default=KEY_SEPARATOR, description="Character joining key components")
    escape_char: str = Field(default=ESCAPE_CHAR, description="Character marking the next character as literal")

    # Tokenization
    word_separator: str = Field(
        default=DEFAULT_WORD_SEPARATOR_PATTERN,
        description="Regex used to split free text into tokens",
    )
    analyzer: str = Field(default="default", description="Analyzer name used by encode_analyzed callers")

    # Logging
    log_level: str = Field(default="warning", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("word_separator")
    @classmethod
    def _check_word_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("word_separator must not be empty")
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"word_separator is not a valid regex: {exc}") from exc
        return value

    @field_validator("analyzer")
    @classmethod
    def _check_analyzer(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in available_analyzers():
            raise ValueError(f"Unknown analyzer '{value}'. Available: {available_analyzers()}")
        return normalized

    @model_validator(mode="after")
    def _check_separators(self) -> "Settings":
        validate_separators(self.token_separator, self.key_separator, self.escape_char)
        validate_word_separator(self.word_separator, self.token_separator, self.key_separator, self.escape_char)
        return self

    def get_word_separator_pattern(self) -> re.Pattern[str]:
        """Compile the configured word separator."""
        return re.compile(self.word_separator)
