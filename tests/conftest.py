"""Shared fixtures: an in-memory reader session over a file in tmp_path."""
from __future__ import annotations

from pathlib import Path

import pytest

from sreader.display import BufferedSink
from sreader.session import ReaderSession
from sreader.stores import PAGE_SIZE_KEY, TEXT_PATH_KEY, JsonSettings, JsonStateStore

FOX_TEXT = "The quick brown fox."


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "fox.txt").write_text(FOX_TEXT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings() -> JsonSettings:
    settings = JsonSettings()
    settings.set(TEXT_PATH_KEY, "fox.txt")
    settings.set(PAGE_SIZE_KEY, 5)
    return settings


@pytest.fixture
def store() -> JsonStateStore:
    return JsonStateStore()


@pytest.fixture
def sink() -> BufferedSink:
    return BufferedSink()


@pytest.fixture
def session(settings, store, sink, workspace) -> ReaderSession:
    return ReaderSession(settings=settings, store=store, sink=sink, base_dir=workspace)
