"""Typed template payloads and their rendering into a declaration blob."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError

TYPE_TAGS: Mapping[str, str] = MappingProxyType(
    {
        "string": "string",
        "repeated string": "string[]",
        "number": "number",
        "integer": "number",
        "uint64": "number",
        "uint32": "number",
        "long": "number",
        "float": "number",
        "repeated float": "number[]",
        "repeated uint64": "number[]",
        "repeated uint32": "number[]",
        "boolean": "boolean",
        "bool": "boolean",
        "enum": "string",
    }
)

DREF_TEMPLATE_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "articleText": "TextTemplate",
        "transcript": "TextTemplate",
        "chapters": "TextTemplate",
        "instructions": "TextTemplate",
        "featuredImage": "ImageTemplate",
        "avatar": "ImageTemplate",
        "podcastArtwork": "ImageTemplate",
        "thumbnails": "ImageTemplate",
        "episodeArtwork": "ImageTemplate",
        "imageItems": "ImageTemplate",
        "audioItems": "AudioTemplate",
        "videoItems": "VideoTemplate",
        "replyTo": "PostTemplate",
        "authorDRef": "CreatorRegistrationTemplate",
        "exercise": "ExerciseTemplate",
    }
)

CREATOR_FIELDS = frozenset({"creator"})
UNKNOWN_TYPE = "unknown"

HELPER_TYPES = """export type CreatorReference =
  | string
  | {
      didAddress: string;
      creatorSig: string;
    }
;"""


class FieldDefinition(BaseModel):
    """A single field of a template."""

    type: str
    index: int = 0
    required: bool | None = None

    model_config = {"extra": "ignore"}


class TemplateData(BaseModel):
    """Template body. Extra ``<field>Values`` keys carry enum members."""

    template: str
    fields_in_template: dict[str, FieldDefinition] = Field(
        default_factory=dict, alias="fieldsInTemplate"
    )

    model_config = {"populate_by_name": True, "extra": "allow"}

    def enum_values(self, field_name: str) -> list[Any] | None:
        values = (self.model_extra or {}).get(f"{field_name}Values")
        return values if isinstance(values, list) and values else None

    def fingerprint(self) -> str:
        """Canonical JSON of the field layout, used to tell shapes apart."""
        fields = {
            name: definition.model_dump(mode="python", exclude_none=True)
            for name, definition in self.fields_in_template.items()
        }
        return json.dumps(fields, sort_keys=True)


class TemplateOip(BaseModel):
    """Chain metadata attached to a template record."""

    did_tx: str | None = Field(default=None, alias="didTx")
    in_arweave_block: int = Field(default=0, alias="inArweaveBlock")
    indexed_at: str | None = Field(default=None, alias="indexedAt")
    record_status: str | None = Field(default=None, alias="recordStatus")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class TemplateRecord(BaseModel):
    data: TemplateData
    oip: TemplateOip = Field(default_factory=TemplateOip)


class TemplatesPayload(BaseModel):
    """Top-level templates response."""

    templates: list[TemplateRecord] = Field(default_factory=list)


def to_pascal_case(value: str) -> str:
    return value[:1].upper() + value[1:]


def interface_name(template_name: str, version: int = 1) -> str:
    base = f"{to_pascal_case(template_name)}Template"
    return base if version <= 1 else f"{base}V{version}"


def _enum_literal(value: Any) -> str:
    if isinstance(value, dict) and value.get("code"):
        return f'"{value["code"]}"'
    return f'"{value}"'


def map_field_type(
    tag: str, enum_values: list[Any] | None = None, field_name: str | None = None
) -> str:
    """Translate a template field tag into a TypeScript type expression."""
    if field_name in CREATOR_FIELDS and tag == "string":
        return "CreatorReference"
    if tag in {"dref", "repeated dref"}:
        linked = DREF_TEMPLATE_TYPES.get(field_name or "")
        if tag == "dref":
            return f"string | {linked}" if linked else "string"
        return f"(string | {linked})[]" if linked else "string[]"
    if enum_values:
        return " | ".join(_enum_literal(value) for value in enum_values)
    return TYPE_TAGS.get(tag, UNKNOWN_TYPE)


def render_interface(name: str, data: TemplateData) -> str:
    """Render ``data`` as an ``export interface`` block, fields ordered by index."""
    ordered = sorted(data.fields_in_template.items(), key=lambda item: item[1].index)
    field_lines = []
    for field_name, definition in ordered:
        ts_type = map_field_type(definition.type, data.enum_values(field_name), field_name)
        optional = "?" if definition.required is False else ""
        field_lines.append(f"  {field_name}{optional}: {ts_type};")
    body = "\n".join(field_lines)
    return f"export interface {name} {{\n{body}\n}}" if body else f"export interface {name} {{\n}}"


class VersioningStrategy(Protocol):
    """Chooses which records to render and under which interface names."""

    def select(self, records: list[TemplateRecord]) -> list[tuple[str, TemplateData]]:
        ...


class LatestOnlyStrategy:
    """One interface per template name, from the record in the newest block."""

    def select(self, records: list[TemplateRecord]) -> list[tuple[str, TemplateData]]:
        latest: dict[str, TemplateRecord] = {}
        for record in records:
            name = record.data.template
            existing = latest.get(name)
            if existing is None or record.oip.in_arweave_block > existing.oip.in_arweave_block:
                latest[name] = record
        return [(interface_name(name), record.data) for name, record in latest.items()]


class KeepAllVersionsStrategy:
    """Every distinct field layout of a template gets its own interface.

    The first layout seen keeps the bare name; later layouts are suffixed
    ``V2``, ``V3`` and so on. Exact repeats are dropped.
    """

    def select(self, records: list[TemplateRecord]) -> list[tuple[str, TemplateData]]:
        seen: set[tuple[str, str]] = set()
        versions: dict[str, int] = {}
        selected: list[tuple[str, TemplateData]] = []
        for record in records:
            name = record.data.template
            key = (name, record.data.fingerprint())
            if key in seen:
                continue
            seen.add(key)
            versions[name] = versions.get(name, 0) + 1
            selected.append((interface_name(name, versions[name]), record.data))
        return selected


def strategy_for(keep_versions: bool) -> VersioningStrategy:
    return KeepAllVersionsStrategy() if keep_versions else LatestOnlyStrategy()


def render_header(generated_at: datetime | None = None) -> str:
    stamp = (generated_at or datetime.now(timezone.utc)).isoformat()
    return (
        "// Auto-generated TypeScript types from OIP Arweave templates\n"
        f"// Generated on {stamp}\n"
        "\n"
    )


def render_blob(
    payload: TemplatesPayload,
    keep_versions: bool = False,
    generated_at: datetime | None = None,
    strategy: VersioningStrategy | None = None,
) -> str:
    """Render a whole payload as a declaration blob with a 3-line header."""
    chooser = strategy or strategy_for(keep_versions)
    interfaces = [render_interface(name, data) for name, data in chooser.select(payload.templates)]
    return render_header(generated_at) + HELPER_TYPES + "\n\n" + "\n\n".join(interfaces) + "\n"


def load_templates_payload(path: str | Path) -> TemplatesPayload:
    """Load a templates payload from YAML or JSON."""
    path = Path(path)
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    try:
        return TemplatesPayload(**data)
    except (TypeError, ValidationError) as exc:
        raise ValueError(f"Invalid templates payload {path}") from exc
