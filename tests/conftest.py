"""Shared test fixtures and configuration."""

import logging
import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from search_keys.escaping import KEY_SEPARATOR, TOKEN_SEPARATOR


ENV_PREFIX = "SEARCH_KEYS_"

# Strings that stress the escape scheme: separators, escape runs, and mixes of both.
TRICKY_STRINGS = [
    "",
    "plain",
    "with space",
    "\\",
    "\\\\",
    "\\\\\\",
    TOKEN_SEPARATOR,
    KEY_SEPARATOR,
    f"\\{TOKEN_SEPARATOR}",
    f"\\\\{KEY_SEPARATOR}",
    f"{KEY_SEPARATOR}\\",
    f"a{TOKEN_SEPARATOR}b{KEY_SEPARATOR}c\\d",
    f"\\{KEY_SEPARATOR}\\{TOKEN_SEPARATOR}\\",
    f"{TOKEN_SEPARATOR}{TOKEN_SEPARATOR}{KEY_SEPARATOR}{KEY_SEPARATOR}",
    "unicode ünïcødé 漢字 🙂",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop SEARCH_KEYS_* variables so Settings only sees what a test sets."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        # pytest's own capture handlers subclass StreamHandler; only drop ours.
        if type(handler) is logging.StreamHandler and handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def tricky_strings() -> list[str]:
    return list(TRICKY_STRINGS)
