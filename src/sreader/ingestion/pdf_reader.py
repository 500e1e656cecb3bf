from __future__ import annotations

from pathlib import Path
from typing import List

import fitz  # pymupdf


def _page_text(page: fitz.Page) -> str:
    # Blocks keep reading order; sort top to bottom, then left to right
    blocks = page.get_text("blocks")
    blocks.sort(key=lambda b: (b[1], b[0]))
    lines: List[str] = []
    for b in blocks:
        text = b[4]
        if not text or not text.strip():
            continue
        lines.extend(ln.strip() for ln in text.strip().splitlines() if ln.strip())
    return "\n".join(lines)


def read_pdf(path: Path) -> str:
    with fitz.open(path) as doc:
        return "\n".join(_page_text(page) for page in doc)
