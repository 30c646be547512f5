import pytest

from oip_arweave_types.scanner import (
    BlobTypeError,
    DeclarationKind,
    capture_block,
    declaration_kind,
    export_names,
    find_declaration,
    match_header,
    scan_blob,
    scan_declarations,
)


def test_match_header_requires_line_start() -> None:
    assert match_header("export interface AudioTemplate {") == "AudioTemplate"
    assert match_header("export type Status =") == "Status"
    assert match_header("  export interface Indented {") is None
    assert match_header("// export interface Commented {") is None
    assert match_header("export const value = 1;") is None


def test_declaration_kind_from_header_line() -> None:
    assert declaration_kind("export type Status =") is DeclarationKind.UNION_ALIAS
    assert declaration_kind("export type Inline = { a: string };") is DeclarationKind.INTERFACE
    assert declaration_kind("export interface Foo {") is DeclarationKind.INTERFACE


def test_scan_reports_boundaries(foo_baz_blob: str) -> None:
    result = scan_blob(foo_baz_blob)
    assert result.names() == ["Foo", "Baz"]
    assert result.all_exports == ("Foo", "Baz")
    foo, baz = result.blocks
    assert (foo.start_line, foo.end_line) == (3, 5)
    assert (baz.start_line, baz.end_line) == (7, 9)
    assert foo.text == "export interface Foo {\n  bar: Baz;\n}"
    assert baz.kind is DeclarationKind.INTERFACE


def test_union_alias_ends_at_bare_semicolon_despite_braces(blob_factory) -> None:
    blob = blob_factory(
        "export type Status =",
        '  | "draft"',
        "  | {",
        "      kind: string;",
        "    }",
        "  ;",
        "export interface After {",
        "  y: number;",
        "}",
    )
    status, after = scan_blob(blob).blocks
    assert status.kind is DeclarationKind.UNION_ALIAS
    assert status.lines[-1] == "  ;"
    assert len(status.lines) == 6
    assert after.name == "After"


def test_interface_with_nested_object_waits_for_balance(blob_factory) -> None:
    blob = blob_factory(
        "export interface Outer {",
        "  inner: {",
        "    deep: string;",
        "  };",
        "  tail: number;",
        "}",
        "trailing text",
    )
    (outer,) = scan_blob(blob).blocks
    assert outer.lines[-1] == "}"
    assert "  tail: number;" in outer.lines
    assert "trailing text" not in outer.lines


def test_single_line_interface_closes_on_header(blob_factory) -> None:
    blob = blob_factory("export interface Empty {}", "export interface Next {", "}")
    empty, nxt = scan_blob(blob).blocks
    assert empty.lines == ("export interface Empty {}",)
    assert nxt.name == "Next"


def test_truncated_block_runs_to_end_of_input(blob_factory) -> None:
    blob = blob_factory("export interface Broken {", "  a: string;")
    (broken,) = scan_blob(blob).blocks
    assert broken.lines == ("export interface Broken {", "  a: string;")
    assert broken.end_line == 4


def test_new_header_closes_open_block_only_when_scanning(blob_factory) -> None:
    blob = blob_factory(
        "export interface Open {",
        "  a: string;",
        "export interface Other {",
        "  b: string;",
        "}",
    )
    lines = blob.split("\n")
    scanned = scan_declarations(lines)
    assert scanned.names() == ["Open", "Other"]
    assert scanned.blocks[0].lines == ("export interface Open {", "  a: string;")

    captured = capture_block(lines, 3)
    assert captured.name == "Open"
    assert captured.lines[-1] == "}"
    assert len(captured.lines) == 5


def test_find_declaration_uses_exact_name(blob_factory) -> None:
    blob = blob_factory(
        "export interface AudioTemplate {",
        "  a: string;",
        "}",
        "export interface Audio {",
        "  b: string;",
        "}",
    )
    lines = blob.split("\n")
    block = find_declaration(lines, "Audio")
    assert block is not None
    assert block.start_line == 6
    assert find_declaration(lines, "Missing") is None


def test_export_names_skip_header_and_duplicates(blob_factory) -> None:
    blob = blob_factory("export type A =", ";", "export type A =", ";", "export type B =", ";")
    assert export_names(blob.split("\n")) == ["A", "B"]


def test_non_text_blob_is_a_contract_violation() -> None:
    with pytest.raises(BlobTypeError):
        scan_blob(b"export interface Foo {}")  # type: ignore[arg-type]
    assert issubclass(BlobTypeError, TypeError)


def test_interface_with_brace_on_next_line(blob_factory) -> None:
    blob = blob_factory(
        "export interface Foo",
        "{",
        "  a: string;",
        "}",
        "export interface Bar {",
        "  b: number;",
        "}",
    )
    result = scan_blob(blob)
    assert result.names() == ["Foo", "Bar"]
    foo = result.blocks[0]
    assert foo.kind is DeclarationKind.INTERFACE
    assert foo.lines == ("export interface Foo", "{", "  a: string;", "}")
