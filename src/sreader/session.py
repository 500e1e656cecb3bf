"""Reader session: one viewer over one document.

The session owns the collaborators (settings, state store, display sink)
and the position tracker, and exposes the user commands. Commands never
raise :class:`ReaderError`; failures go to the sink as a single message and
the command returns ``False``.

Staleness policy: every command that shows or moves the position calls
:meth:`ReaderSession.refresh` first, so settings, document text and saved
offsets are re-read before use.
"""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, Optional

from .errors import ReaderError
from .ingestion.loader import load_document
from .ingestion.structure import Document
from .stores import DEFAULT_PAGE_SIZE, GLOBAL_SCOPE, PAGE_SIZE_KEY, TEXT_PATH_KEY
from .text.paging import format_progress, page, progress_percent, render_page
from .tracker import Direction, PositionTracker, ReadPosition, validate_page_size


class Visibility(enum.Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class ReaderSession:
    def __init__(self, settings, store, sink, base_dir: Optional[Path] = None, scope: str = GLOBAL_SCOPE) -> None:
        self.settings = settings
        self.store = store
        self.sink = sink
        self.base_dir = base_dir
        self.scope = scope
        self.tracker = PositionTracker(store, DEFAULT_PAGE_SIZE)
        self.visibility = Visibility.HIDDEN

    @property
    def document(self) -> Optional[Document]:
        return self.tracker.document

    @property
    def visible(self) -> bool:
        return self.visibility is Visibility.VISIBLE

    # -- core steps ----------------------------------------------------

    def refresh(self, reopen: bool = False) -> ReadPosition:
        """Re-read settings and text, then reconcile the offset.

        With ``reopen`` the offset is taken from the store instead of memory.
        Nothing changes unless settings and document load cleanly.
        """
        config = self.settings.read_config()
        page_size = validate_page_size(config.page_size)
        document = load_document(config.text_path, self.base_dir)
        if reopen or self.tracker.document is None:
            return self.tracker.open(document, page_size)
        return self.tracker.reconfigure(page_size=page_size, document=document)

    def render(self) -> None:
        document = self.tracker.document
        if document is None:
            return
        position = self.tracker.position
        text = render_page(page(document.content, position.offset, position.page_size))
        self.sink.render(text, format_progress(progress_percent(position.offset, position.length)))

    def _run(self, name: str, action: Callable[[], None]) -> bool:
        try:
            action()
        except ReaderError as e:
            logging.warning("%s failed: %s", name, e)
            self.sink.error(str(e))
            return False
        return True

    # -- commands ------------------------------------------------------

    def show(self) -> bool:
        def _show() -> None:
            self.refresh(reopen=True)
            self.visibility = Visibility.VISIBLE
            self.render()
        return self._run("show", _show)

    def toggle(self) -> bool:
        if self.visible:
            return self.hide()
        return self.show()

    def hide(self) -> bool:
        self.visibility = Visibility.HIDDEN
        self.sink.hide()
        return True

    def _page(self, direction: Direction) -> bool:
        def _move() -> None:
            # Navigating while hidden reveals the viewer with a fresh open
            self.refresh(reopen=not self.visible)
            self.tracker.advance(direction, self.tracker.page_size)
            self.visibility = Visibility.VISIBLE
            self.render()
        return self._run(f"page {direction.value}", _move)

    def page_forward(self) -> bool:
        return self._page(Direction.FORWARD)

    def page_backward(self) -> bool:
        return self._page(Direction.BACKWARD)

    def quit(self) -> bool:
        def _quit() -> None:
            self.tracker.save()
            self.tracker.close()
            self.visibility = Visibility.HIDDEN
            self.sink.hide()
        return self._run("quit", _quit)

    def clear_all_positions(self) -> bool:
        def _clear() -> None:
            self.tracker.reset_all()
            self.tracker.close()
            self.visibility = Visibility.HIDDEN
            self.sink.hide()
            self.sink.message("All saved offsets have been cleared.")
        return self._run("clear", _clear)

    def edit_settings(self, action, raw: str) -> bool:
        return self._run(f"set {action.key}", lambda: action.apply(self, action.validate(raw)))

    # -- settings ------------------------------------------------------

    def _save_setting(self, key: str, value) -> None:
        # Write where the effective value lives so a workspace value never shadows the edit
        self.settings.set(key, value, self.settings.scope_of(key) or self.scope)

    def set_text_path(self, path_spec: str) -> None:
        # Load before saving so a bad path never replaces a working one
        document = load_document(path_spec, self.base_dir)
        page_size = validate_page_size(self.settings.read_config().page_size)
        self._save_setting(TEXT_PATH_KEY, path_spec)
        self.tracker.reconfigure(page_size=page_size, document=document)
        self.sink.message(f"Text path set to {document.path}")
        if self.visible:
            self.render()

    def set_page_size(self, page_size: int) -> None:
        page_size = validate_page_size(page_size)
        document = None
        text_path = self.settings.read_config().text_path
        if self.tracker.document is None and text_path:
            # Open now so a saved offset past the new bound is clamped and saved
            document = load_document(text_path, self.base_dir)
        self._save_setting(PAGE_SIZE_KEY, page_size)
        if document is not None:
            self.tracker.open(document, page_size)
        else:
            self.tracker.reconfigure(page_size=page_size)
        self.sink.message(f"Page size set to {page_size}")
        if self.visible:
            self.render()

    def set_offset(self, offset: int) -> None:
        self.refresh(reopen=self.tracker.document is None)
        self.tracker.jump(offset)
        self.sink.message(f"Offset set to {offset}")
        if self.visible:
            self.render()
