from oip_arweave_types.jsdoc import (
    JSDocOptions,
    enhance_with_jsdoc,
    property_comment,
    property_description,
)
from oip_arweave_types.splitter import split_all


def test_property_descriptions() -> None:
    assert property_description("title", "string", False) == "The title or name (text)"
    assert property_description("albumTitle", "string[]", True) == (
        "The album title (array) - Optional field"
    )
    assert property_description("status", '"a" | "b"', False) == "The status (union type)"


def test_schema_descriptions_take_priority() -> None:
    schema = {"AudioTemplate": {"properties": {"title": {"description": "Song title"}}}}
    assert property_description("title", "string", True, "AudioTemplate", schema) == (
        "Song title - Optional field"
    )


def test_property_comment_keeps_indent() -> None:
    assert property_comment("\tyear: number;") == "\t/** The year of creation or publication (numeric) */"
    assert property_comment("export interface Foo {") is None


def test_enhance_comments_interfaces_and_properties(blob_factory) -> None:
    blob = blob_factory(
        "export type Kind =",
        '  | "a"',
        ";",
        "export interface AudioTemplate {",
        "  title: string;",
        "  duration?: number;",
        "}",
    )
    options = JSDocOptions(
        include_examples=False,
        include_version=True,
        version="1.2.3",
        custom_tags={"since": "2024"},
    )
    lines = enhance_with_jsdoc(blob, options).split("\n")
    start = lines.index("export interface AudioTemplate {")
    assert lines[start - 5 : start] == [
        "/**",
        " * Represents an audio file with metadata and technical information",
        " * @version 1.2.3",
        " * @since 2024",
        " */",
    ]
    assert lines[start + 1] == "  /** The title or name (text) */"
    assert lines[start + 3] == "  /** The duration in seconds or specified units (numeric) - Optional field */"
    assert lines[-1] == "}"
    assert 'export type Kind =' in lines


def test_enhanced_blob_still_splits(foo_baz_blob: str) -> None:
    enhanced = enhance_with_jsdoc(foo_baz_blob)
    result = split_all(enhanced)
    assert result.names == ["Foo", "Baz"]
    assert "  /** The bar */" in result.files["Foo.ts"]


def test_examples_are_comment_prefixed(blob_factory) -> None:
    blob = blob_factory("export interface Basic {", "  title: string;", "}")
    lines = enhance_with_jsdoc(blob).split("\n")
    example_start = lines.index(" * @example")
    assert lines[example_start + 1] == " * ```typescript"
    assert lines[example_start + 2] == " * const basic: Basic = {"
    assert all(line.startswith(" *") for line in lines[example_start : lines.index(" */")])
