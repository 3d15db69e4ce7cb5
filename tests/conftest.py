"""Shared test fixtures for gs-i18n."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

GOLDEN_DIR = Path(__file__).parent / "golden"

CLIENT_SECRET = {
    "installed": {
        "client_id": "client_id",
        "client_secret": "client_secret",
        "redirect_uris": ["urn:ietf:wg:oauth:2.0:oob", "http://localhost"],
    }
}


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture
def client_secret_file(tmp_path: Path) -> Path:
    path = tmp_path / "client_secret.json"
    path.write_text(json.dumps(CLIENT_SECRET))
    return path


@pytest.fixture
def token_file(tmp_path: Path) -> Path:
    """A token stored by a previous run."""
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"access_token": "stored-token", "token_type": "Bearer"}))
    return path


@pytest.fixture
def error_log() -> Iterator[list[str]]:
    """Collect messages logged at ERROR level."""
    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(message.record["message"])

    handler_id = logger.add(sink, level="ERROR")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def info_log() -> Iterator[list[str]]:
    """Collect messages logged at INFO level and above."""
    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(message.record["message"])

    handler_id = logger.add(sink, level="INFO")
    yield messages
    logger.remove(handler_id)
