"""Line scanner that locates top-level declarations in a generated blob.

The scanner works on raw text lines rather than a syntax tree. A
declaration starts at a line beginning with ``export interface <Name>`` or
``export type <Name>`` and ends either when its braces balance (interfaces)
or at a line holding only ``;`` (union aliases). Truncated input is never an
error: a block that does not terminate simply runs to the end of the input.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass

HEADER_LINES = 3
HEADER_PATTERN = re.compile(r"^export (?:type|interface) ([A-Za-z0-9_]+)")
UNION_TERMINATOR = ";"


class BlobTypeError(TypeError):
    """Raised when a blob handed to the scanner is not text."""


class DeclarationKind(str, enum.Enum):
    """How a declaration is terminated."""

    INTERFACE = "interface"
    UNION_ALIAS = "unionAlias"


class ScanState(enum.Enum):
    SEEKING_HEADER = "seeking_header"
    IN_INTERFACE_BODY = "in_interface_body"
    IN_UNION_BODY = "in_union_body"


@dataclass(frozen=True)
class DeclarationBlock:
    """One top-level named declaration and the lines it spans."""

    name: str
    kind: DeclarationKind
    lines: tuple[str, ...]
    start_line: int
    end_line: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ScanResult:
    blocks: tuple[DeclarationBlock, ...]
    all_exports: tuple[str, ...]

    def names(self) -> list[str]:
        return [block.name for block in self.blocks]


def ensure_blob(blob: object) -> str:
    """Return ``blob`` unchanged, rejecting anything that is not ``str``."""
    if not isinstance(blob, str):
        msg = f"Declaration blob must be str, got {type(blob).__name__}"
        raise BlobTypeError(msg)
    return blob


def blob_lines(blob: object) -> list[str]:
    return ensure_blob(blob).split("\n")


def split_header(lines: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate the comment banner from the declaration lines."""
    return list(lines[:HEADER_LINES]), list(lines[HEADER_LINES:])


def match_header(line: str) -> str | None:
    """Return the declared name when ``line`` introduces a declaration."""
    match = HEADER_PATTERN.match(line)
    return match.group(1) if match else None


def declaration_kind(header_line: str) -> DeclarationKind:
    if "=" in header_line and "{" not in header_line:
        return DeclarationKind.UNION_ALIAS
    return DeclarationKind.INTERFACE


def brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


class BlockCapture:
    """Incremental capture of a single declaration, fed one line at a time.

    Interfaces keep a running brace balance that includes the header line and
    end on the first line after which the balance is back at zero. Union
    aliases end at the first line whose stripped content is exactly ``;``,
    whatever braces appear in their members.
    """

    def __init__(self, name: str, header_line: str, start_line: int) -> None:
        self.name = name
        self.kind = declaration_kind(header_line)
        self.start_line = start_line
        self.state = (
            ScanState.IN_UNION_BODY
            if self.kind is DeclarationKind.UNION_ALIAS
            else ScanState.IN_INTERFACE_BODY
        )
        self.balance = 0
        self._opened = False
        self._lines: list[str] = []
        self.feed(header_line)

    @property
    def done(self) -> bool:
        return self.state is ScanState.SEEKING_HEADER

    def feed(self, line: str) -> bool:
        """Append ``line`` and return True once the declaration is complete."""
        if self.done:
            return True
        self._lines.append(line)
        if self.state is ScanState.IN_UNION_BODY:
            if line.strip() == UNION_TERMINATOR:
                self.state = ScanState.SEEKING_HEADER
        else:
            self.balance += brace_delta(line)
            self._opened = self._opened or "{" in line
            if self._opened and self.balance == 0:
                self.state = ScanState.SEEKING_HEADER
        return self.done

    def block(self) -> DeclarationBlock:
        return DeclarationBlock(
            name=self.name,
            kind=self.kind,
            lines=tuple(self._lines),
            start_line=self.start_line,
            end_line=self.start_line + len(self._lines) - 1,
        )


def capture_block(lines: Sequence[str], start: int) -> DeclarationBlock:
    """Capture the declaration whose header sits at ``lines[start]``.

    Later declaration headers do not stop the capture; only the kind's own
    termination rule (or the end of input) does.
    """
    header = lines[start]
    capture = BlockCapture(match_header(header) or "", header, start)
    for line in lines[start + 1 :]:
        if capture.feed(line):
            break
    return capture.block()


def find_declaration(
    lines: Sequence[str], name: str, start_index: int = HEADER_LINES
) -> DeclarationBlock | None:
    """Return the first declaration called ``name``, or None."""
    for idx in range(start_index, len(lines)):
        if match_header(lines[idx]) == name:
            return capture_block(lines, idx)
    return None


def export_names(lines: Sequence[str], start_index: int = HEADER_LINES) -> list[str]:
    """Every declared name in discovery order, without duplicates."""
    names: dict[str, None] = {}
    for line in lines[start_index:]:
        name = match_header(line)
        if name is not None:
            names.setdefault(name, None)
    return list(names)


def scan_declarations(lines: Sequence[str], start_index: int = HEADER_LINES) -> ScanResult:
    """Partition ``lines`` into top-level declaration blocks.

    A new header closes whatever block is still open. Lines between blocks
    (blank lines, comments) belong to no block.
    """
    blocks: list[DeclarationBlock] = []
    current: BlockCapture | None = None
    for idx in range(start_index, len(lines)):
        line = lines[idx]
        name = match_header(line)
        if name is not None:
            if current is not None:
                blocks.append(current.block())
            current = BlockCapture(name, line, idx)
        elif current is not None:
            current.feed(line)
        if current is not None and current.done:
            blocks.append(current.block())
            current = None
    if current is not None:
        blocks.append(current.block())
    return ScanResult(blocks=tuple(blocks), all_exports=tuple(export_names(lines, start_index)))


def scan_blob(blob: str) -> ScanResult:
    return scan_declarations(blob_lines(blob))
