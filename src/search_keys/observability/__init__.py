"""Logging setup shared by the search-keys command line tools."""

from search_keys.observability.logging import JsonFormatter, configure_logging


__all__ = [
    "JsonFormatter",
    "configure_logging",
]
