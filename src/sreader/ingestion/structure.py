from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    path: str        # resolved absolute path, the key offsets are stored under
    content: str

    @property
    def length(self) -> int:
        return len(self.content)
