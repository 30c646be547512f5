"""Split a declaration blob into one file per declaration plus an index."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .scanner import DeclarationBlock, blob_lines, scan_declarations, split_header


@dataclass
class SplitResult:
    """File name to content mapping plus the text of the aggregating index."""

    files: dict[str, str] = field(default_factory=dict)
    index_content: str = ""
    names: list[str] = field(default_factory=list)


def import_statement(name: str) -> str:
    return f"import type {{ {name} }} from './{name}';"


def export_statement(name: str) -> str:
    return f"export * from './{name}';"


def find_required_imports(
    block_text: str, all_exports: Iterable[str], own_name: str
) -> list[str]:
    """Import lines for every other export mentioned as a whole word."""
    imports: list[str] = []
    for export_name in all_exports:
        if export_name == own_name:
            continue
        if re.search(rf"\b{re.escape(export_name)}\b", block_text):
            imports.append(import_statement(export_name))
    return imports


def render_block_file(header: str, block: DeclarationBlock, all_exports: Iterable[str]) -> str:
    imports = find_required_imports(block.text, all_exports, block.name)
    import_block = "\n".join(imports) + "\n\n" if imports else ""
    return header + import_block + block.text + "\n"


def split_all(blob: str, extension: str = "ts") -> SplitResult:
    """Partition ``blob`` into self-contained files.

    Every file carries the blob's header, the imports it needs and its
    declaration body. When a name is declared twice the later body wins, but
    the index keeps the name once, at its first position.
    """
    lines = blob_lines(blob)
    header_lines, _ = split_header(lines)
    header = "\n".join(header_lines) + "\n\n"
    scan = scan_declarations(lines)

    files: dict[str, str] = {}
    order: dict[str, None] = {}
    for block in scan.blocks:
        files[f"{block.name}.{extension}"] = render_block_file(header, block, scan.all_exports)
        order.setdefault(block.name, None)

    index_content = header + "\n".join(export_statement(name) for name in order) + "\n"
    return SplitResult(files=files, index_content=index_content, names=list(order))
