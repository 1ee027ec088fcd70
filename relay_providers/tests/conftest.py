"""Pytest configuration for the relay_providers test suite.

Every test runs with the working directory and ``HOME`` pointed at a fresh
temporary directory so a real ``.relay`` profile file on the developer's
machine can never leak into CLI or profile tests, and with the relay
environment variables removed from ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, List

import pytest

from relay_providers.base.logging import get_logger

_SCRUBBED_PREFIXES = ("RELAY_",)
_SCRUBBED_NAMES = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
    "AZURE_OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
    "GROQ_API_KEY",
    "MISTRAL_API_KEY",
    "TOGETHER_API_KEY",
    "COHERE_API_KEY",
    "OLLAMA_HOST",
    "OLLAMA_BASE_URL",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate cwd, home and relay-related environment variables."""
    for name in list(os.environ):
        if name.startswith(_SCRUBBED_PREFIXES) or name in _SCRUBBED_NAMES:
            monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    yield


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture()
def captured_logs() -> Iterator[ListHandler]:
    """Attach a list handler to the shared ``relay`` logger at DEBUG level."""
    base = get_logger()
    handler = ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)
