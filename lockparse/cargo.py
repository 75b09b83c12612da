"""Parser for Cargo.lock files."""

from __future__ import annotations

import tomllib

from .types import Ecosystem, LockfileError, PackageDetails


def parse_cargo_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a Cargo.lock file."""
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
            ecosystem=Ecosystem.CARGO,
            compare_as=Ecosystem.CARGO,
        )
        for entry in entries
    ]