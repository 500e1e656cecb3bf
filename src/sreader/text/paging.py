from __future__ import annotations

import re
from typing import Sized, Union

NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def page(content: str, offset: int, page_size: int) -> str:
    """Return the window ``[offset, offset + page_size)`` of ``content``.

    Out-of-range offsets are clipped rather than rejected; callers are
    expected to clamp upstream.
    """
    if not content or page_size <= 0:
        return ""
    start = min(max(0, offset), len(content))
    return content[start:start + page_size]


def max_offset(content: Union[Sized, int], page_size: int) -> int:
    length = content if isinstance(content, int) else len(content)
    return max(0, length - page_size)


def clamp(offset: int, upper: int) -> int:
    return min(max(0, offset), max(0, upper))


def progress_percent(offset: int, length: int) -> int:
    """Percentage of the document before ``offset``, rounded half away from zero.

    Integer arithmetic keeps ties exact: 1/8 -> 12.5 -> 13.
    """
    if length <= 0:
        return 0
    offset = min(max(0, offset), length)
    return (offset * 200 + length) // (2 * length)


def render_page(text: str) -> str:
    # One visual line per page
    return NEWLINE_RE.sub(" ", text)


def format_progress(percent: int) -> str:
    return f"{percent}%"
