"""Parser for poetry.lock files."""

from __future__ import annotations

import tomllib

from .types import Ecosystem, LockfileError, PackageDetails


def parse_poetry_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a poetry.lock file."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err

    try:
        data = tomllib.loads(contents.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as err:
        raise LockfileError(f"could not parse {path}: {err}") from err

    entries = data.get("package", [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise LockfileError(f"could not parse {path}: 'package' must be an array of tables")

    return [
        PackageDetails(
            name=entry.get("name", ""),
            version=entry.get("version", ""),
            commit=(entry.get("source") or {}).get("resolved_reference", ""),
            ecosystem=Ecosystem.PIP,
            compare_as=Ecosystem.PIP,
        )
        for entry in entries
    ]