"""
oip_arweave_types
=================

Fetch OIP Arweave template definitions and emit TypeScript declarations,
either as a single file, one file per declaration plus an index, or a
single template with the declarations it references.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("oip_arweave_types")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
