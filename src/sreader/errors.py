from __future__ import annotations

from pathlib import Path
from typing import Optional


class ReaderError(Exception):
    """Base class for every user-facing reader failure."""


class LoaderError(ReaderError):
    pass


class NotConfiguredError(LoaderError):
    def __init__(self) -> None:
        super().__init__("Text path is not configured. Set it with the settings command.")


class NoBaseDirectoryError(LoaderError):
    def __init__(self, path_spec: str) -> None:
        super().__init__(f"Relative path '{path_spec}' needs a workspace directory, but none is open.")
        self.path_spec = path_spec


class PathEscapesBaseError(LoaderError):
    def __init__(self, path_spec: str, base_dir: Path) -> None:
        super().__init__(f"Path '{path_spec}' resolves outside the workspace directory {base_dir}.")
        self.path_spec = path_spec
        self.base_dir = base_dir


class ReadFailedError(LoaderError):
    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Unable to read {path} due to: {cause}")
        self.path = path
        self.cause = cause
        self.__cause__ = cause


class OutOfRangeError(ReaderError):
    def __init__(self, target: int, max_offset: int) -> None:
        super().__init__(f"Offset {target} is out of range (valid: 0..{max_offset}).")
        self.target = target
        self.max_offset = max_offset


class InvalidPageSizeError(ReaderError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Page size must be a positive integer, got {value!r}.")
        self.value = value


class StorageError(ReaderError):
    def __init__(self, message: str, *, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class InvalidValueError(ReaderError):
    pass
