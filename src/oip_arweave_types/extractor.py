"""Pull a single declaration, plus the declarations it references, out of a blob."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .scanner import blob_lines, find_declaration, split_header

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = frozenset({"string", "number", "boolean", "unknown"})

# Heuristic reference patterns. They miss unconventional names and catch
# stray capitalised words; callers rely on exactly this behaviour.
DEPENDENCY_PATTERNS = (
    re.compile(r"\b([A-Z][A-Za-z0-9]*(?:Code|Template|Reference))\b"),
    re.compile(r":\s*([A-Z][A-Za-z0-9]+)(?:\s*[;\]}]|\s*\|)"),
    re.compile(r"\|\s*([A-Z][A-Za-z0-9]+)(?:\s*[;\]}]|\s*\|)"),
)


def find_dependencies_in_line(line: str, dependencies: dict[str, None], exclude: str) -> None:
    for pattern in DEPENDENCY_PATTERNS:
        for match in pattern.finditer(line):
            type_name = match.group(1)
            if type_name != exclude and type_name not in PRIMITIVE_TYPES:
                dependencies.setdefault(type_name, None)


def find_dependencies(lines: Iterable[str], exclude: str) -> list[str]:
    """Names referenced by ``lines`` in first-seen order, without ``exclude``."""
    dependencies: dict[str, None] = {}
    for line in lines:
        find_dependencies_in_line(line, dependencies, exclude)
    return list(dependencies)


def extract_one(blob: str, name: str) -> str | None:
    """Return ``name`` with its direct dependencies, or None when absent.

    The output is the blob's three header lines, a blank line, every
    referenced declaration found in the blob (each followed by a blank
    line), then the target itself. Only direct references are followed;
    references made by the dependencies are not expanded. Names resolve
    exactly, so each referenced declaration is emitted once.
    """
    lines = blob_lines(blob)
    target = find_declaration(lines, name)
    if target is None or not target.lines:
        logger.debug("Declaration %s not found in blob", name)
        return None

    header, _ = split_header(lines)
    output: list[str] = [*header, ""]
    for dependency in find_dependencies(target.lines, exclude=name):
        block = find_declaration(lines, dependency)
        if block is None:
            logger.debug("Skipping unresolved reference %s in %s", dependency, name)
            continue
        output.extend([block.text, ""])
    output.extend(target.lines)
    return "\n".join(output)
