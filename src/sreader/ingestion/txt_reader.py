from __future__ import annotations

from pathlib import Path


def read_txt(path: Path) -> str:
    """Read a plain text file as a single string.

    Decoding is strict so that a file in the wrong encoding fails loudly
    instead of showing mangled pages. A leading byte-order mark is dropped.
    """
    return Path(path).read_text(encoding="utf-8-sig")
