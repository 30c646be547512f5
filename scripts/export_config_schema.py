"""Export JSON Schemas for the CLI config file and the templates payload.

Editors can point ``$schema`` at the config schema to validate
``oip.config.json`` while it is being written.
"""

from __future__ import annotations

from pathlib import Path

import typer
import ujson as json

from oip_arweave_types.config import OipConfig
from oip_arweave_types.schema import TemplatesPayload

app = typer.Typer(help="Export JSON Schema for `OipConfig` and `TemplatesPayload`.")


@app.command()
def main(
    out_dir: Path = typer.Argument(..., help="Directory that receives the .json schemas."),
    pretty: bool = typer.Option(True, help="Write pretty-printed JSON."),
) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    schemas = {
        "oip-config.schema.json": OipConfig.model_json_schema(by_alias=True),
        "templates-payload.schema.json": TemplatesPayload.model_json_schema(by_alias=True),
    }
    for filename, schema in schemas.items():
        (out_dir / filename).write_text(json.dumps(schema, indent=2 if pretty else 0))
    typer.echo(f"Wrote {len(schemas)} schemas to {out_dir}")


if __name__ == "__main__":
    app()
