from datetime import datetime, timezone
from pathlib import Path

import pytest
import ujson as json
import yaml

from oip_arweave_types.extractor import extract_one
from oip_arweave_types.schema import (
    KeepAllVersionsStrategy,
    LatestOnlyStrategy,
    TemplateData,
    TemplatesPayload,
    load_templates_payload,
    map_field_type,
    render_blob,
    render_interface,
)
from oip_arweave_types.splitter import split_all

STAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_map_field_type_table() -> None:
    assert map_field_type("string") == "string"
    assert map_field_type("repeated string") == "string[]"
    assert map_field_type("uint64") == "number"
    assert map_field_type("repeated float") == "number[]"
    assert map_field_type("bool") == "boolean"
    assert map_field_type("mystery") == "unknown"
    assert map_field_type("enum", ["a", {"code": "b"}]) == '"a" | "b"'


def test_map_field_type_links_drefs() -> None:
    assert map_field_type("dref", field_name="avatar") == "string | ImageTemplate"
    assert map_field_type("repeated dref", field_name="videoItems") == "(string | VideoTemplate)[]"
    assert map_field_type("dref", field_name="somethingElse") == "string"
    assert map_field_type("repeated dref") == "string[]"
    assert map_field_type("string", field_name="creator") == "CreatorReference"


def test_render_interface_orders_by_index(templates_payload: dict) -> None:
    data = TemplateData(**templates_payload["templates"][0]["data"])
    assert render_interface("AudioTemplate", data) == "\n".join(
        [
            "export interface AudioTemplate {",
            "  title: string;",
            "  duration?: number;",
            '  format: "mp3" | "flac";',
            "  creator: CreatorReference;",
            "}",
        ]
    )


def test_latest_only_keeps_newest_block(templates_payload: dict) -> None:
    payload = TemplatesPayload(**templates_payload)
    selected = LatestOnlyStrategy().select(payload.templates)
    assert [name for name, _ in selected] == ["AudioTemplate", "PostTemplate"]
    assert "bitrate" in selected[0][1].fields_in_template


def test_keep_all_versions_suffixes_new_shapes(templates_payload: dict) -> None:
    records = TemplatesPayload(**templates_payload).templates
    selected = KeepAllVersionsStrategy().select(records + [records[0]])
    assert [name for name, _ in selected] == ["AudioTemplate", "PostTemplate", "AudioTemplateV2"]


def test_rendered_blob_feeds_splitter(templates_payload: dict) -> None:
    blob = render_blob(TemplatesPayload(**templates_payload), keep_versions=True, generated_at=STAMP)
    lines = blob.split("\n")
    assert lines[0].startswith("// Auto-generated")
    assert lines[1] == f"// Generated on {STAMP.isoformat()}"
    assert lines[2] == ""

    result = split_all(blob)
    assert result.names == ["CreatorReference", "AudioTemplate", "PostTemplate", "AudioTemplateV2"]
    assert "import type { CreatorReference } from './CreatorReference';" in result.files[
        "AudioTemplate.ts"
    ]
    post = result.files["PostTemplate.ts"]
    assert "import type { AudioTemplate } from './AudioTemplate';" in post
    assert "AudioTemplateV2" not in post

    extracted = extract_one(blob, "AudioTemplate")
    assert extracted is not None
    assert "export type CreatorReference =" in extracted


def test_load_payload_json_and_yaml(tmp_path: Path, templates_payload: dict) -> None:
    json_path = tmp_path / "templates.json"
    json_path.write_text(json.dumps(templates_payload))
    yaml_path = tmp_path / "templates.yaml"
    yaml_path.write_text(yaml.safe_dump(templates_payload))
    assert len(load_templates_payload(json_path).templates) == 3
    assert load_templates_payload(yaml_path).templates[1].data.template == "post"


def test_load_payload_rejects_bad_shape(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"templates": [{"data": {}}]}))
    with pytest.raises(ValueError):
        load_templates_payload(path)
