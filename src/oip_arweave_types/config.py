"""Project configuration: discovery, loading and the sample file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.oip.onl/api/templates"
DEFAULT_OUTPUT_DIR = "oip"
CONFIG_FILENAMES = (
    "oip.config.json",
    "oip.config.yaml",
    "oip.config.yml",
    ".oiprc",
    ".oiprc.json",
)


class TemplateOverride(BaseModel):
    """Per-template settings for the ``add`` command."""

    output_path: str | None = Field(default=None, alias="outputPath")
    force: bool | None = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class OipConfig(BaseModel):
    """Resolved CLI configuration. Accepts camelCase keys from existing files."""

    api_root: str = Field(default=DEFAULT_API_ROOT, alias="apiRoot")
    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, alias="outputDir")
    default_single_file: bool = Field(default=False, alias="defaultSingleFile")
    templates: dict[str, TemplateOverride] = Field(default_factory=dict)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def template(self, name: str) -> TemplateOverride:
        return self.templates.get(name) or TemplateOverride()

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="python", by_alias=True, exclude_none=True)


def find_config_file(cwd: str | Path | None = None) -> Path | None:
    base = Path(cwd) if cwd is not None else Path.cwd()
    for filename in CONFIG_FILENAMES:
        candidate = base / filename
        if candidate.exists():
            return candidate
    return None


def load_config_file(path: str | Path) -> OipConfig:
    """Load a config from YAML or JSON, raising ValueError when invalid."""
    path = Path(path)
    text = path.read_text()
    try:
        if path.suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
        return OipConfig(**data)
    except (TypeError, ValueError, yaml.YAMLError, ValidationError) as exc:
        raise ValueError(f"Invalid config {path}") from exc


def load_config(cwd: str | Path | None = None) -> OipConfig:
    """Find and load the project config, falling back to defaults."""
    path = find_config_file(cwd)
    if path is None:
        logger.debug("No config file found, using defaults")
        return OipConfig()
    try:
        config = load_config_file(path)
    except ValueError as exc:
        logger.warning("Failed to load config file %s (%s); using defaults", path, exc.__cause__)
        return OipConfig()
    logger.info("Loaded configuration from %s", path.name)
    return config


def save_config(config: OipConfig, path: str | Path) -> None:
    """Persist a config as YAML or JSON based on file suffix."""
    path = Path(path)
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(config.dump(), sort_keys=False))
    else:
        path.write_text(json.dumps(config.dump(), indent=2))


def sample_config() -> OipConfig:
    return OipConfig(
        templates={
            "Audio": TemplateOverride(output_path="types/audio.ts"),
            "Video": TemplateOverride(output_path="types/video.ts", force=True),
        }
    )


def create_sample_config(path: str | Path = "oip.config.json") -> Path:
    path = Path(path)
    save_config(sample_config(), path)
    return path
