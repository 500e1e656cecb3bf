"""Settings edits as small request/response steps.

Each action parses and validates raw user input on its own, then applies the
value to a session. A front end only has to pick an action and collect one
string; nothing here touches a terminal or a widget.
"""
from __future__ import annotations

from typing import Dict, Optional

from .errors import InvalidValueError, NotConfiguredError
from .tracker import validate_page_size


class ConfigAction:
    key = ""
    label = ""
    prompt = ""

    def validate(self, raw: str):
        raise NotImplementedError

    def apply(self, session, value) -> None:
        raise NotImplementedError


class SetTextPath(ConfigAction):
    key = "path"
    label = "Set text path"
    prompt = "Path to the text file (absolute or relative to the workspace)"

    def validate(self, raw: str) -> str:
        value = (raw or "").strip()
        if not value:
            raise NotConfiguredError()
        return value

    def apply(self, session, value: str) -> None:
        session.set_text_path(value)


class SetPageSize(ConfigAction):
    key = "page-size"
    label = "Set page size"
    prompt = "Characters per page"

    def validate(self, raw: str) -> int:
        return validate_page_size(raw)

    def apply(self, session, value: int) -> None:
        session.set_page_size(value)


class SetOffset(ConfigAction):
    key = "offset"
    label = "Set current offset"
    prompt = "Character offset to jump to"

    def validate(self, raw: str) -> int:
        try:
            return int(str(raw).strip())
        except ValueError:
            raise InvalidValueError(f"Offset must be an integer, got {raw!r}.") from None

    def apply(self, session, value: int) -> None:
        session.set_offset(value)


CONFIG_ACTIONS = (SetTextPath(), SetPageSize(), SetOffset())
_BY_KEY: Dict[str, ConfigAction] = {a.key: a for a in CONFIG_ACTIONS}


def get_action(key: str) -> Optional[ConfigAction]:
    return _BY_KEY.get(key)
