"""Annotate a declaration blob with JSDoc comments."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import ujson as json
import yaml
from pydantic import BaseModel, Field

from .scanner import ensure_blob

logger = logging.getLogger(__name__)

INTERFACE_PATTERN = re.compile(r"^export interface (\w+)")
PROPERTY_PATTERN = re.compile(r"^\s+(\w+)(\??):\s*([^;]+);?")
INDENT_PATTERN = re.compile(r"^(\s+)")

INTERFACE_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "Album": "Represents a music album with metadata information",
        "Artwork": "Represents an artwork piece with descriptive metadata",
        "Audio": "Represents an audio file with metadata and technical information",
        "Video": "Represents a video file with metadata and technical specifications",
        "Image": "Represents an image file with metadata and technical details",
        "Text": "Represents a text document with metadata and content information",
        "Basic": "Basic OIP template with fundamental metadata fields",
        "Person": "Represents a person entity with biographical information",
        "Podcast": "Represents a podcast episode with metadata and technical details",
        "PodcastShow": "Represents a podcast show with series-level metadata",
        "Recipe": "Represents a cooking recipe with ingredients and instructions",
        "Workout": "Represents a fitness workout with exercises and metadata",
        "Exercise": "Represents a single exercise with instructions and metadata",
        "Post": "Represents a social media or blog post with content and metadata",
        "NutritionalInfo": "Represents nutritional information for food items",
        "CreatorRegistration": "Represents creator registration information for OIP",
    }
)

PROPERTY_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "title": "The title or name",
        "name": "The name identifier",
        "description": "A detailed description",
        "artist": "The artist or creator name",
        "author": "The author or creator",
        "year": "The year of creation or publication",
        "date": "The date information",
        "type": "The type or category",
        "category": "The category classification",
        "tags": "Associated tags or keywords",
        "url": "The URL or web address",
        "duration": "The duration in seconds or specified units",
        "size": "The file size or dimensions",
        "format": "The file format or type",
        "version": "The version number or identifier",
        "id": "The unique identifier",
        "email": "The email address",
        "phone": "The phone number",
        "address": "The physical address",
        "price": "The price or cost",
        "currency": "The currency type",
        "language": "The language code or name",
        "country": "The country name or code",
        "license": "The license information",
        "copyright": "The copyright information",
        "thumbnail": "The thumbnail image URL or data",
        "preview": "The preview content or URL",
    }
)

INTERFACE_EXAMPLES: Mapping[str, str] = MappingProxyType(
    {
        "Album": 'const album: Album = {\n  albumTitle: "My Album",\n  artist: "Artist Name",\n  year: 2024\n};',
        "Audio": 'const audio: Audio = {\n  title: "My Song",\n  artist: "Artist Name",\n  duration: 180\n};',
        "Video": 'const video: Video = {\n  title: "My Video",\n  duration: 300,\n  format: "mp4"\n};',
        "Basic": 'const basic: Basic = {\n  title: "My Content",\n  description: "Content description"\n};',
    }
)

OPTIONAL_SUFFIX = " - Optional field"


class JSDocOptions(BaseModel):
    """What to include in generated interface comments."""

    include_examples: bool = True
    include_authors: bool = False
    include_version: bool = False
    author: str | None = None
    version: str | None = None
    custom_tags: dict[str, str] = Field(default_factory=dict)


SchemaData = Mapping[str, Mapping[str, Any]]


def _schema_field(schema_data: SchemaData | None, interface: str, prop: str) -> Mapping[str, Any]:
    if not schema_data:
        return {}
    template = schema_data.get(interface) or {}
    properties = template.get("properties") or {}
    return properties.get(prop) or {}


def interface_description(name: str, schema_data: SchemaData | None = None) -> str:
    schema_description = ((schema_data or {}).get(name) or {}).get("description")
    if schema_description:
        return str(schema_description)
    base = name[: -len("Template")] if name.endswith("Template") else name
    return INTERFACE_DESCRIPTIONS.get(
        name,
        INTERFACE_DESCRIPTIONS.get(base, f"Represents a {name} entity from OIP Arweave templates"),
    )


def type_description(ts_type: str) -> str | None:
    if "[]" in ts_type:
        return "array"
    if "|" in ts_type:
        return "union type"
    return {
        "string": "text",
        "number": "numeric",
        "boolean": "true/false",
        "Date": "date object",
    }.get(ts_type)


def property_description(
    prop: str,
    ts_type: str,
    optional: bool,
    interface: str | None = None,
    schema_data: SchemaData | None = None,
) -> str:
    """Describe a property, preferring schema text over the static tables."""
    if interface:
        schema_description = _schema_field(schema_data, interface, prop).get("description")
        if schema_description:
            return str(schema_description) + (OPTIONAL_SUFFIX if optional else "")

    clean_type = re.sub(r"\s+", " ", ts_type.strip())
    description = PROPERTY_DESCRIPTIONS.get(prop.lower())
    if description is None:
        human = re.sub(r"([A-Z])", r" \1", prop).lower().strip()
        description = f"The {human}"
    type_info = type_description(clean_type)
    if type_info:
        description += f" ({type_info})"
    if optional:
        description += OPTIONAL_SUFFIX
    return description


def interface_comment(
    name: str, options: JSDocOptions, schema_data: SchemaData | None = None
) -> list[str]:
    lines = ["/**", f" * {interface_description(name, schema_data)}"]
    if options.include_authors and options.author:
        lines.append(f" * @author {options.author}")
    if options.include_version and options.version:
        lines.append(f" * @version {options.version}")
    for tag, value in options.custom_tags.items():
        lines.append(f" * @{tag} {value}")
    example = INTERFACE_EXAMPLES.get(name) if options.include_examples else None
    if example:
        lines.append(" * @example")
        lines.append(" * ```typescript")
        lines.extend(f" * {example_line}" for example_line in example.split("\n"))
        lines.append(" * ```")
    lines.append(" */")
    return lines


def property_comment(
    line: str, interface: str | None = None, schema_data: SchemaData | None = None
) -> str | None:
    match = PROPERTY_PATTERN.match(line)
    if match is None:
        return None
    prop, optional, ts_type = match.groups()
    indent_match = INDENT_PATTERN.match(line)
    indent = indent_match.group(1) if indent_match else "\t"
    description = property_description(prop, ts_type, bool(optional), interface, schema_data)
    return f"{indent}/** {description} */"


def enhance_with_jsdoc(
    blob: str,
    options: JSDocOptions | None = None,
    schema_data: SchemaData | None = None,
) -> str:
    """Insert a comment block before every interface and a line above each property.

    Property comments stop at the first line of the interface body that
    contains ``}``. Union aliases and other lines pass through untouched.
    """
    options = options or JSDocOptions()
    lines = ensure_blob(blob).split("\n")
    enhanced: list[str] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        match = INTERFACE_PATTERN.match(line)
        if match is None:
            enhanced.append(line)
            idx += 1
            continue
        name = match.group(1)
        enhanced.extend(interface_comment(name, options, schema_data))
        enhanced.append(line)
        idx += 1
        if "}" in line:
            continue
        while idx < len(lines) and "}" not in lines[idx]:
            comment = property_comment(lines[idx], name, schema_data)
            if comment:
                enhanced.append(comment)
            enhanced.append(lines[idx])
            idx += 1
        if idx < len(lines):
            enhanced.append(lines[idx])
            idx += 1
    logger.debug("Added JSDoc comments to %d lines", len(enhanced) - len(lines))
    return "\n".join(enhanced)


def load_schema_data(path: str | Path) -> dict[str, Any]:
    """Load per-interface descriptions from YAML or JSON.

    The file maps interface names to ``{"description": ..., "properties":
    {name: {"description": ...}}}``.
    """
    path = Path(path)
    text = path.read_text()
    try:
        data = yaml.safe_load(text) if path.suffix in {".yaml", ".yml"} else json.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid schema descriptions {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Schema descriptions in {path} must be a mapping")
    return data
