from __future__ import annotations

"""Header-aware markdown chunking with an estimated token budget."""

import math
import re
from dataclasses import dataclass

MAX_CHUNK_TOKENS = 800
SPLIT_CHUNK_TOKENS = 700
MIN_TRAILING_TOKENS = 20

_SECTION_SPLIT_RE = re.compile(r"(?=^#{2,3}\s)", re.MULTILINE)
_HEADER_RE = re.compile(r"^(#{2,3})\s+(.+)")
_FENCE = "```"


@dataclass(frozen=True)
class MarkdownChunk:
    """Chunk text with the header it falls under."""
    title: str
    content: str


def estimate_tokens(text: str) -> int:
    """Approximate token count as ceil(chars / 4)."""
    return math.ceil(len(text) / 4)


def split_sections(text: str) -> list[str]:
    """Split markdown in front of every level-2 or level-3 header."""
    return [part for part in _SECTION_SPLIT_RE.split(text) if part]


def chunk_markdown(
    text: str,
    default_title: str,
    max_tokens: int = MAX_CHUNK_TOKENS,
    split_tokens: int = SPLIT_CHUNK_TOKENS,
    min_tokens: int = MIN_TRAILING_TOKENS,
) -> list[MarkdownChunk]:
    """Pack header sections into chunks of at most ``max_tokens``.

    Sections are accumulated until adding the next one would exceed the
    budget; a section that is too large on its own is split by line without
    cutting through a fenced code block. A trailing fragment of
    ``min_tokens`` or fewer is dropped.
    """
    chunks: list[MarkdownChunk] = []
    buffer = ""
    buffer_title = default_title
    current_title = default_title

    for part in split_sections(text):
        header = _HEADER_RE.match(part)
        if header:
            current_title = header.group(2).strip()

        combined = buffer + part
        if estimate_tokens(combined) <= max_tokens:
            if not buffer:
                buffer_title = current_title
            buffer = combined
            continue

        if buffer.strip():
            chunks.append(MarkdownChunk(title=buffer_title, content=buffer.strip()))
        buffer = ""
        buffer_title = current_title

        if estimate_tokens(part) <= max_tokens:
            buffer = part
            continue
        buffer = _split_large_section(part, current_title, split_tokens, chunks)

    if buffer.strip() and estimate_tokens(buffer) > min_tokens:
        chunks.append(MarkdownChunk(title=buffer_title, content=buffer.strip()))
    return chunks


def _split_large_section(
    part: str,
    title: str,
    split_tokens: int,
    chunks: list[MarkdownChunk],
) -> str:
    """Flush line groups of an oversized section; return the unflushed rest."""
    sub_buffer = ""
    for line in part.split("\n"):
        sub_buffer += line + "\n"
        fences_balanced = sub_buffer.count(_FENCE) % 2 == 0
        if fences_balanced and estimate_tokens(sub_buffer) > split_tokens:
            chunks.append(MarkdownChunk(title=title, content=sub_buffer.strip()))
            sub_buffer = ""
    return sub_buffer if sub_buffer.strip() else ""
