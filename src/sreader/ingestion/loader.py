from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import NoBaseDirectoryError, NotConfiguredError, PathEscapesBaseError, ReadFailedError
from .pdf_reader import read_pdf
from .structure import Document
from .txt_reader import read_txt


def resolve_path(path_spec: str, base_dir: Optional[Path]) -> Path:
    """Turn a configured path into a canonical absolute path.

    Absolute paths are taken as explicit user intent and are not checked
    against the base directory. Relative paths must stay inside it.
    """
    spec = (path_spec or "").strip()
    if not spec:
        raise NotConfiguredError()

    try:
        # Unknown ~user raises RuntimeError, an embedded NUL raises ValueError
        candidate = Path(spec).expanduser()
        if candidate.is_absolute():
            return candidate.resolve()
        if base_dir is None:
            raise NoBaseDirectoryError(spec)
        base = Path(base_dir).expanduser().resolve()
        resolved = (base / candidate).resolve()
    except (RuntimeError, ValueError, OSError) as e:
        raise ReadFailedError(Path(spec), e) from e

    try:
        resolved.relative_to(base)
    except ValueError:
        raise PathEscapesBaseError(spec, base) from None
    return resolved


def load_document(path_spec: str, base_dir: Optional[Path] = None) -> Document:
    path = resolve_path(path_spec, base_dir)
    try:
        if path.suffix.lower() == ".pdf":
            logging.info("Reading PDF: %s", path)
            content = read_pdf(path)
        else:
            logging.info("Reading TXT: %s", path)
            content = read_txt(path)
    except (OSError, UnicodeDecodeError, RuntimeError, ValueError) as e:
        # pymupdf reports damaged files as RuntimeError subclasses
        raise ReadFailedError(path, e) from e
    logging.debug("Loaded %d characters from %s", len(content), path)
    return Document(path=str(path), content=content)
