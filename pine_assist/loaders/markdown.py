from __future__ import annotations

"""Markdown documentation loader producing indexed doc chunks."""

import logging
from pathlib import Path

from pine_assist.loaders.chunking import chunk_markdown
from pine_assist.loaders.text import iter_files, read_text
from pine_assist.rag.keywords import extract_keywords
from pine_assist.rag.types import DocChunk

logger = logging.getLogger(__name__)


def load_doc_chunks(docs_root: Path) -> list[DocChunk]:
    """Chunk every markdown file under ``docs_root`` into DocChunk records."""
    chunks: list[DocChunk] = []
    for path in iter_files(docs_root, ".md"):
        content = read_text(path)
        if content is None:
            continue
        relative = path.relative_to(docs_root)
        section = relative.parent.as_posix() if relative.parent != Path(".") else "root"
        for piece in chunk_markdown(content, default_title=path.stem):
            chunks.append(
                DocChunk(
                    id=f"doc-{len(chunks)}",
                    source=relative.as_posix(),
                    section=section,
                    title=piece.title,
                    content=piece.content,
                    keywords=extract_keywords(piece.content),
                )
            )
    logger.info("doc_chunks_loaded", extra={"root": str(docs_root), "count": len(chunks)})
    return chunks
