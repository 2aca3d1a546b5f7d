from __future__ import annotations

"""Example script loader with version, declaration and function detection."""

import logging
import re
from pathlib import Path, PurePosixPath

from pine_assist.loaders.text import iter_files, read_text
from pine_assist.rag.keywords import NAMESPACED_CALL_RE, STANDALONE_BUILTINS, extract_keywords, unique
from pine_assist.rag.types import ExampleScript

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".pine"
MAX_CODE_CHARS = 3000

_VERSION_RE = re.compile(r"//@version=(\d+)")
_DECLARATION_RE = re.compile(
    r"^(indicator|strategy|library)\s*\(\s*[\"']([^\"']+)[\"']",
    re.MULTILINE,
)
_BUILTIN_CALL_RES = {
    name: re.compile(rf"\b{name}\s*\(") for name in STANDALONE_BUILTINS
}


def detect_functions(code: str) -> list[str]:
    """Namespaced calls in order of appearance, then standalone built-in calls."""
    found = list(NAMESPACED_CALL_RE.findall(code))
    found.extend(name for name, pattern in _BUILTIN_CALL_RES.items() if pattern.search(code))
    return unique(found)


def _category_for(relative: PurePosixPath) -> str:
    parts = relative.parts
    if len(parts) > 2:
        return parts[1]
    if len(parts) > 1:
        return parts[0]
    return "general"


def parse_example_script(code: str, relative: PurePosixPath, script_id: str) -> ExampleScript:
    """Build an ExampleScript record from source code and its relative path."""
    version_match = _VERSION_RE.search(code)
    version = f"v{version_match.group(1)}" if version_match else "unknown"
    declaration = _DECLARATION_RE.search(code)
    script_type = declaration.group(1) if declaration else "indicator"
    title = declaration.group(2) if declaration else relative.stem
    category = _category_for(relative)
    functions_used = detect_functions(code)
    return ExampleScript(
        id=script_id,
        source=relative.as_posix(),
        category=category,
        title=title,
        version=version,
        script_type=script_type,
        code=code[:MAX_CODE_CHARS],
        functions_used=functions_used,
        keywords=unique(
            [title.lower(), category, script_type, version, *functions_used, *extract_keywords(code)]
        ),
    )


def load_example_scripts(scripts_root: Path) -> list[ExampleScript]:
    """Index every ``.pine`` file under ``scripts_root``."""
    scripts: list[ExampleScript] = []
    for path in iter_files(scripts_root, SCRIPT_SUFFIX):
        code = read_text(path)
        if code is None:
            continue
        relative = PurePosixPath(path.relative_to(scripts_root).as_posix())
        scripts.append(parse_example_script(code, relative, script_id=f"script-{len(scripts)}"))
    logger.info("example_scripts_loaded", extra={"root": str(scripts_root), "count": len(scripts)})
    return scripts
