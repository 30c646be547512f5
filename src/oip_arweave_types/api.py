"""Public API for downstream modules."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import ujson as json

from .client import TYPESCRIPT_FIELD, TemplatesClient
from .config import OipConfig, load_config
from .extractor import extract_one
from .jsdoc import JSDocOptions, SchemaData, enhance_with_jsdoc
from .scanner import HEADER_PATTERN, blob_lines, ensure_blob, export_names
from .schema import load_templates_payload, render_blob
from .splitter import SplitResult, split_all

__all__ = [
    "GenerationReport",
    "TypeAnalysis",
    "add_template",
    "analyze_types",
    "extract_file",
    "generate_types",
    "read_blob",
    "render_templates_file",
    "resolve_declaration_name",
    "resolve_output_paths",
    "split_file",
    "write_split",
    "write_text",
]

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.ts"
SINGLE_FILENAME = "generated-types.ts"

ConfirmOverwrite = Callable[[Path], bool]


@dataclass
class TypeAnalysis:
    declaration_count: int
    names: list[str]


@dataclass
class GenerationReport:
    """Where ``generate_types`` wrote its output and how much it wrote."""

    output_path: Path
    output_dir: Path
    file_count: int
    declaration_count: int
    single_file: bool


def analyze_types(blob: str) -> TypeAnalysis:
    """Count declarations by header match, duplicates included."""
    names = [
        match.group(1)
        for match in map(HEADER_PATTERN.match, ensure_blob(blob).split("\n"))
        if match
    ]
    return TypeAnalysis(declaration_count=len(names), names=names)


def resolve_output_paths(
    output: str | Path | None, single_file: bool, cwd: str | Path | None = None
) -> tuple[Path, Path]:
    """Return ``(final_output_path, output_dir)``.

    In single-file mode ``output`` names a file (``generated-types.ts`` is
    appended when it has no suffix); otherwise it names a directory that
    receives ``index.ts``.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if output is None:
        output_dir = base / "oip"
        final = output_dir / (SINGLE_FILENAME if single_file else INDEX_FILENAME)
        return final, output_dir
    target = (base / Path(output)).resolve()
    if single_file:
        final = target if target.suffix else target / SINGLE_FILENAME
        return final, final.parent
    return target / INDEX_FILENAME, target


def write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def write_split(result: SplitResult, output_dir: Path, index_path: Path | None = None) -> Path:
    """Write every split file into ``output_dir`` followed by the index."""
    for filename, content in result.files.items():
        write_text(output_dir / filename, content)
    return write_text(index_path or output_dir / INDEX_FILENAME, result.index_content)


def read_blob(path: str | Path) -> str:
    """Read a declaration blob from a raw text file or an API-style JSON file."""
    path = Path(path)
    text = path.read_text()
    if path.suffix != ".json":
        return text
    data = json.loads(text)
    blob = data.get(TYPESCRIPT_FIELD) if isinstance(data, dict) else None
    if not isinstance(blob, str):
        raise ValueError(f"{path} has no {TYPESCRIPT_FIELD!r} field")
    return blob


def generate_types(
    config: OipConfig | None = None,
    output: str | Path | None = None,
    single_file: bool | None = None,
    include_jsdoc: bool = True,
    jsdoc_options: JSDocOptions | None = None,
    schema_data: SchemaData | None = None,
    client: TemplatesClient | None = None,
    cwd: str | Path | None = None,
) -> GenerationReport:
    """Fetch every template and write declarations to disk.

    ``schema_data`` supplies interface and property descriptions that take
    priority over the built-in JSDoc text. Raises ``TemplatesApiError`` when
    the blob cannot be fetched.
    """
    config = config or load_config(cwd)
    client = client or TemplatesClient(config.api_root)
    single = config.default_single_file if single_file is None else single_file

    blob = client.fetch_all_templates()
    if include_jsdoc:
        blob = enhance_with_jsdoc(blob, jsdoc_options, schema_data)
    analysis = analyze_types(blob)

    final_path, output_dir = resolve_output_paths(output or config.output_dir, single, cwd)
    if single:
        write_text(final_path, blob)
        file_count = 1
    else:
        result = split_all(blob)
        write_split(result, output_dir, final_path)
        file_count = len(result.files)
    logger.info("Retrieved %d declarations", analysis.declaration_count)
    return GenerationReport(
        output_path=final_path,
        output_dir=output_dir,
        file_count=file_count,
        declaration_count=analysis.declaration_count,
        single_file=single,
    )


def resolve_declaration_name(blob: str, template: str) -> str | None:
    """Map a template name such as ``audio`` to the declaration it names.

    Prefers ``Audio``, then ``AudioTemplate``, then the first export that
    starts with ``Audio``.
    """
    base = template[:1].upper() + template[1:]
    exports = export_names(blob_lines(blob))
    for candidate in (base, f"{base}Template"):
        if candidate in exports:
            return candidate
    return next((export for export in exports if export.startswith(base)), None)


def _template_output_path(name: str, config: OipConfig, cwd: Path) -> Path:
    override = config.template(name).output_path
    if override:
        path = Path(override)
        return path if path.is_absolute() else cwd / path
    return cwd / "oip" / f"{name}.ts"


def add_template(
    name: str,
    config: OipConfig | None = None,
    force: bool | None = None,
    confirm: ConfirmOverwrite | None = None,
    client: TemplatesClient | None = None,
    cwd: str | Path | None = None,
) -> Path | None:
    """Fetch one template, extract it with its dependencies and write it.

    Returns the written path, or None when the template is missing or the
    overwrite was declined.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    config = config or load_config(base)
    client = client or TemplatesClient(config.api_root)
    override = config.template(name)
    force = force if force is not None else bool(override.force)

    blob = client.fetch_template(name)
    if blob is None:
        return None

    declaration = resolve_declaration_name(blob, name)
    extracted = extract_one(blob, declaration) if declaration else None
    if extracted is None:
        logger.error('Template "%s" not found in API response', name)
        return None

    output_path = _template_output_path(name, config, base)
    if output_path.exists() and not force:
        if confirm is None or not confirm(output_path):
            logger.info("Operation cancelled.")
            return None
    return write_text(output_path, extracted)


def extract_file(blob_path: str | Path, name: str, out_path: str | Path) -> Path | None:
    """Extract ``name`` from a blob on disk into ``out_path``."""
    extracted = extract_one(read_blob(blob_path), name)
    if extracted is None:
        return None
    return write_text(Path(out_path), extracted)


def split_file(blob_path: str | Path, out_dir: str | Path) -> SplitResult:
    """Split a blob on disk into ``out_dir``."""
    result = split_all(read_blob(blob_path))
    write_split(result, Path(out_dir))
    return result


def render_templates_file(
    input_path: str | Path, out_path: str | Path, keep_versions: bool = False
) -> Path:
    """Render a templates JSON/YAML payload into a single declaration file."""
    payload = load_templates_payload(input_path)
    return write_text(Path(out_path), render_blob(payload, keep_versions=keep_versions))
