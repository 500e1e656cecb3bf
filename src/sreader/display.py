"""Display sinks: where rendered pages and messages end up."""
from __future__ import annotations

import sys
from typing import List, Optional, TextIO


class ConsoleSink:
    """Print each update as a single line."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def render(self, page_text: str, progress_text: str) -> None:
        self._write(f"{page_text}  [{progress_text}]")

    def hide(self) -> None:
        pass

    def message(self, text: str) -> None:
        self._write(text)

    def error(self, text: str) -> None:
        print(f"error: {text}", file=self.stream or sys.stderr)


class BufferedSink:
    """Keep the latest page, progress and status for a UI to pull."""

    def __init__(self) -> None:
        self.page_text = ""
        self.progress_text = ""
        self.status = ""
        self.visible = False
        self.errors: List[str] = []

    def render(self, page_text: str, progress_text: str) -> None:
        self.page_text = page_text
        self.progress_text = progress_text
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.page_text = ""
        self.progress_text = ""

    def message(self, text: str) -> None:
        self.status = text

    def error(self, text: str) -> None:
        self.status = f"❌ {text}"
        self.errors.append(text)
