"""Analyzer pipelines that turn text into tokens before they are encoded.

The design follows Whoosh's composable tokenizer/filter split: a tokenizer
yields ``Token`` objects, filters rewrite or drop them, and an analyzer runs
the whole chain. ``encode_analyzed`` packs the resulting token texts into a
single key component.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol

from search_keys.tokenizer import DEFAULT_WORD_SEPARATOR, KeyTokenizer, get_default_tokenizer


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class SeparatorTokenizer:
    """Splits text on a boundary pattern and keeps character offsets.

    Empty fragments (leading, trailing or between adjacent matches of a
    non-greedy pattern) are skipped.
    """

    def __init__(self, pattern: str | re.Pattern[str] = DEFAULT_WORD_SEPARATOR) -> None:
        self.pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)

    def __call__(self, text: str) -> Iterator[Token]:
        position = 0
        start = 0
        for match in self.pattern.finditer(text):
            end = match.start()
            if end > start:
                yield Token(text=text[start:end], position=position, start_char=start, end_char=end)
                position += 1
            start = max(match.end(), start)
        if start < len(text):
            yield Token(text=text[start:], position=position, start_char=start, end_char=len(text))


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


DEFAULT_STOPWORDS = [
    "a",
    "an",
    "and",
    "are",
    "as",
    "at",
    "be",
    "by",
    "for",
    "in",
    "is",
    "it",
    "of",
    "on",
    "or",
    "the",
    "to",
    "with",
]


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = {word.lower() for word in vocab}

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.lower() not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class KeywordAnalyzer:
    """Analyzer that treats the entire input as a single token."""

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return [Token(text=text, position=0, start_char=0, end_char=len(text))]


_ANALYZER_FACTORIES: dict[str, Callable[[re.Pattern[str]], Analyzer]] = {
    "default": lambda pattern: AnalyzerPipeline(SeparatorTokenizer(pattern), [LowercaseFilter()]),
    "english": lambda pattern: AnalyzerPipeline(SeparatorTokenizer(pattern), [LowercaseFilter(), StopFilter()]),
    "raw": lambda pattern: AnalyzerPipeline(SeparatorTokenizer(pattern)),
    "keyword": lambda pattern: KeywordAnalyzer(),
}


def available_analyzers() -> list[str]:
    return sorted(_ANALYZER_FACTORIES)


def get_analyzer(name: str | None, pattern: re.Pattern[str] = DEFAULT_WORD_SEPARATOR) -> Analyzer:
    """Return analyzer by name, defaulting to the lowercasing separator analyzer.

    ``pattern`` is the word boundary used by the separator-based analyzers.
    """

    if name is None:
        return _ANALYZER_FACTORIES["default"](pattern)
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {available_analyzers()}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized](pattern)


def encode_analyzed(text: str, analyzer: Analyzer | None = None, tokenizer: KeyTokenizer | None = None) -> str:
    """Run ``analyzer`` over ``text`` and encode the token texts as one component.

    The result decodes with ``tokenize(result, is_encoded=True)``.
    """
    tokens = (analyzer or get_analyzer(None))(text)
    return (tokenizer or get_default_tokenizer()).encode_tokens(token.text for token in tokens)
