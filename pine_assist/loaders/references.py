from __future__ import annotations

"""Function and flat reference extraction from namespace markdown files."""

import logging
import re
from pathlib import Path

from pine_assist.loaders.text import iter_files, read_text
from pine_assist.rag.keywords import extract_keywords, unique
from pine_assist.rag.types import FunctionReference

logger = logging.getLogger(__name__)

FLAT_REFERENCE_FILES = ("variables.md", "constants.md", "types.md")
MAX_EXAMPLE_CHARS = 500

_SECTION_SPLIT_RE = re.compile(r"(?=^## \w)", re.MULTILINE)
_SECTION_HEADER_RE = re.compile(r"^## (\S+)")
_DESCRIPTION_RE = re.compile(r"^## [^\n]+\n\n(.*?)(?=\n###|\n---|\n\Z)", re.DOTALL)
_RETURNS_RE = re.compile(r"### Returns\n(.*?)(?=\n###|\n---|\n\Z)", re.DOTALL)
_EXAMPLE_RE = re.compile(r"```pine\n(.*?)```", re.DOTALL)


def _first_paragraph_line(section: str) -> str:
    match = _DESCRIPTION_RE.match(section)
    if not match:
        return ""
    return match.group(1).strip().split("\n")[0]


def _header_name(section: str) -> str | None:
    match = _SECTION_HEADER_RE.match(section)
    if not match:
        return None
    return re.sub(r"\(\)$", "", match.group(1))


def parse_function_sections(content: str, namespace: str, start_id: int = 0) -> list[FunctionReference]:
    """Parse ``## name`` sections of a namespace file into references."""
    refs: list[FunctionReference] = []
    for section in _SECTION_SPLIT_RE.split(content):
        name = _header_name(section)
        if name is None:
            continue
        full_name = name if "." in name else f"{namespace}.{name}"
        description = _first_paragraph_line(section)
        if not description:
            description = " ".join(section.split("\n")[1:3]).strip()
        returns_match = _RETURNS_RE.search(section)
        example_match = _EXAMPLE_RE.search(section)
        example = example_match.group(1).strip() if example_match else ""
        refs.append(
            FunctionReference(
                id=f"ref-{start_id + len(refs)}",
                namespace=namespace,
                function=full_name,
                signature=f"{full_name}(...)",
                description=description,
                returns=returns_match.group(1).strip() if returns_match else "",
                example=example[:MAX_EXAMPLE_CHARS],
                keywords=unique([full_name, namespace, *extract_keywords(section)]),
            )
        )
    return refs


def parse_flat_reference(content: str, namespace: str, start_id: int = 0) -> list[FunctionReference]:
    """Parse variables/constants/types files; the signature is the bare name."""
    refs: list[FunctionReference] = []
    for section in _SECTION_SPLIT_RE.split(content):
        name = _header_name(section)
        if name is None:
            continue
        refs.append(
            FunctionReference(
                id=f"ref-{start_id + len(refs)}",
                namespace=namespace,
                function=name,
                signature=name,
                description=_first_paragraph_line(section),
                keywords=unique([name, namespace, *extract_keywords(section)]),
            )
        )
    return refs


def load_function_refs(docs_root: Path) -> list[FunctionReference]:
    """Extract references from ``reference/functions`` and the flat reference files."""
    refs: list[FunctionReference] = []
    functions_dir = docs_root / "reference" / "functions"
    for path in iter_files(functions_dir, ".md"):
        content = read_text(path)
        if content is None:
            continue
        refs.extend(parse_function_sections(content, namespace=path.stem, start_id=len(refs)))

    for filename in FLAT_REFERENCE_FILES:
        path = docs_root / "reference" / filename
        if not path.is_file():
            continue
        content = read_text(path)
        if content is None:
            continue
        refs.extend(parse_flat_reference(content, namespace=path.stem, start_id=len(refs)))

    logger.info("function_refs_loaded", extra={"root": str(docs_root), "count": len(refs)})
    return refs
