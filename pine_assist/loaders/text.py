from __future__ import annotations

"""Plain text file discovery and reading for corpus ingestion."""

import logging
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def iter_files(root: Path, suffix: str) -> Iterator[Path]:
    """Recursively yield files under ``root`` ending with ``suffix``.

    A missing root yields nothing. Order follows directory listing order.
    """
    if not root.is_dir():
        return
    for entry in root.iterdir():
        if entry.is_dir():
            yield from iter_files(entry, suffix)
        elif entry.name.endswith(suffix):
            yield entry


def read_text(path: Path) -> str | None:
    """Read a UTF-8 file, returning None when it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "corpus_file_unreadable",
            extra={"path": str(path), "detail": type(exc).__name__},
        )
        return None
