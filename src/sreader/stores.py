"""Settings provider and persisted state store.

Both keep their data in a JSON file when given a path and purely in memory
otherwise. Every ``get`` re-reads the file so that changes made by another
process (or a previous CLI invocation) are always picked up.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import StorageError
from .utils.io import read_json, write_json

TEXT_PATH_KEY = "textPath"
PAGE_SIZE_KEY = "pageSize"
DEFAULT_PAGE_SIZE = 20

GLOBAL_SCOPE = "global"
WORKSPACE_SCOPE = "workspace"
SCOPES = (WORKSPACE_SCOPE, GLOBAL_SCOPE)  # lookup order


@dataclass
class ReaderConfig:
    text_path: str = ""
    page_size: Any = DEFAULT_PAGE_SIZE  # validated by the session, not here


class _JsonBacked:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._memory: Dict[str, Any] = {}

    def _load(self) -> Dict[str, Any]:
        if self.path is None:
            return copy.deepcopy(self._memory)
        return read_json(self.path)

    def _save(self, data: Dict[str, Any]) -> None:
        if self.path is None:
            self._memory = copy.deepcopy(data)
            return
        try:
            write_json(self.path, data)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Unable to save {self.path}: {e}", cause=e) from e


class JsonSettings(_JsonBacked):
    """Key-value settings split by scope; workspace values shadow global ones."""

    def scope_of(self, key: str) -> Optional[str]:
        """Return the scope that currently supplies ``key``, if any."""
        data = self._load()
        for scope in SCOPES:
            values = data.get(scope)
            if isinstance(values, dict) and key in values:
                return scope
        return None

    def get(self, key: str, default: Any = None) -> Any:
        scope = self.scope_of(key)
        if scope is None:
            return default
        return self._load()[scope][key]

    def set(self, key: str, value: Any, scope: str = GLOBAL_SCOPE) -> None:
        if scope not in SCOPES:
            raise ValueError(f"Unknown settings scope: {scope}")
        data = self._load()
        values = data.get(scope)
        if not isinstance(values, dict):
            values = {}
        values[key] = value
        data[scope] = values
        self._save(data)
        logging.debug("Setting %s=%r (%s)", key, value, scope)

    def read_config(self) -> ReaderConfig:
        return ReaderConfig(
            text_path=self.get(TEXT_PATH_KEY, "") or "",
            page_size=self.get(PAGE_SIZE_KEY, DEFAULT_PAGE_SIZE),
        )


class JsonStateStore(_JsonBacked):
    """Durable key-value state; values must be JSON serializable."""

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
