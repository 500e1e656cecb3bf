from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import InvalidPageSizeError, OutOfRangeError
from .ingestion.structure import Document
from .text.paging import clamp, max_offset

OFFSET_STATE_KEY = "sreader.offset"  # {document path: offset}


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class ReadPosition:
    offset: int
    page_size: int
    length: int

    @property
    def max_offset(self) -> int:
        return max_offset(self.length, self.page_size)


def validate_page_size(value: Any) -> int:
    """Coerce a raw setting into a page size or raise InvalidPageSizeError."""
    if isinstance(value, bool):
        raise InvalidPageSizeError(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidPageSizeError(value)
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidPageSizeError(value) from None
    if not isinstance(value, int) or value <= 0:
        raise InvalidPageSizeError(value)
    return value


class PositionTracker:
    """Owns the current offset of the active document and its persisted copy.

    Every mutation writes the store first and only then updates the in-memory
    offset, so a failed write leaves both untouched.
    """

    def __init__(self, store, page_size: int) -> None:
        self.store = store
        self.page_size = validate_page_size(page_size)
        self.document: Optional[Document] = None
        self.offset = 0

    # -- store helpers -------------------------------------------------

    def _offset_map(self) -> Dict[str, int]:
        raw = self.store.get(OFFSET_STATE_KEY, {})
        if not isinstance(raw, dict):
            logging.warning("Ignoring malformed offset state: %r", raw)
            return {}
        return dict(raw)

    def _stored_offset(self, path: str) -> Optional[int]:
        value = self._offset_map().get(path)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logging.warning("Ignoring non-numeric saved offset for %s: %r", path, value)
            return 0
        return int(value)

    def _persist(self, path: str, offset: int) -> None:
        offsets = self._offset_map()
        offsets[path] = offset
        self.store.set(OFFSET_STATE_KEY, offsets)

    def _commit(self, new_offset: int) -> None:
        self._persist(self._require_document().path, new_offset)
        self.offset = new_offset

    def _require_document(self) -> Document:
        if self.document is None:
            raise RuntimeError("No document is open")
        return self.document

    # -- public API ----------------------------------------------------

    @property
    def max_offset(self) -> int:
        if self.document is None:
            return 0
        return max_offset(self.document.length, self.page_size)

    @property
    def position(self) -> ReadPosition:
        length = self.document.length if self.document is not None else 0
        return ReadPosition(offset=self.offset, page_size=self.page_size, length=length)

    def open(self, document: Document, page_size: Optional[int] = None) -> ReadPosition:
        size = self.page_size if page_size is None else validate_page_size(page_size)
        return self._open(document, size)

    def _open(self, document: Document, page_size: int) -> ReadPosition:
        stored = self._stored_offset(document.path)
        offset = clamp(stored or 0, max_offset(document.length, page_size))
        if stored is not None and offset != stored:
            # Document shrank since the offset was saved
            logging.info("Clamped saved offset for %s from %d to %d", document.path, stored, offset)
            self._persist(document.path, offset)
        self.document = document
        self.page_size = page_size
        self.offset = offset
        return self.position

    def advance(self, direction: Direction, amount: int) -> ReadPosition:
        self._require_document()
        if amount <= 0:
            raise ValueError(f"Advance amount must be positive, got {amount}")
        if direction is Direction.FORWARD:
            new_offset = min(self.max_offset, self.offset + amount)
        else:
            new_offset = max(0, self.offset - amount)
        self._commit(new_offset)
        return self.position

    def jump(self, target: int) -> ReadPosition:
        self._require_document()
        if target < 0 or target > self.max_offset:
            raise OutOfRangeError(target, self.max_offset)
        self._commit(target)
        return self.position

    def save(self) -> None:
        """Persist the current offset as is."""
        if self.document is not None:
            self._commit(self.offset)

    def reset_all(self) -> None:
        """Forget saved offsets for every document, not only the active one."""
        self.store.set(OFFSET_STATE_KEY, {})
        self.offset = 0
        logging.info("Cleared all saved offsets")

    def reconfigure(self, page_size: Optional[int] = None, document: Optional[Document] = None) -> ReadPosition:
        new_size = self.page_size if page_size is None else validate_page_size(page_size)
        if document is not None and (self.document is None or document.path != self.document.path):
            return self._open(document, new_size)

        target = document if document is not None else self.document
        if target is None:
            self.page_size = new_size
            return self.position

        new_offset = clamp(self.offset, max_offset(target.length, new_size))
        if new_offset != self.offset:
            logging.info("Re-clamped offset for %s from %d to %d", target.path, self.offset, new_offset)
            self._persist(target.path, new_offset)
        self.document = target
        self.page_size = new_size
        self.offset = new_offset
        return self.position

    def close(self) -> None:
        self.document = None
        self.offset = 0
