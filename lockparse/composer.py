"""Parser for composer.lock files."""

from __future__ import annotations

import json
from typing import Any

from .types import Ecosystem, LockfileError, PackageDetails


def _to_details(entry: dict[str, Any]) -> PackageDetails:
    dist = entry.get("dist") or {}
    return PackageDetails(
        name=entry.get("name") or "",
        version=entry.get("version") or "",
        commit=dist.get("reference") or "",
        ecosystem=Ecosystem.COMPOSER,
        compare_as=Ecosystem.COMPOSER,
    )


def parse_composer_lock(path: str) -> list[PackageDetails]:
    """Return the packages, then the dev packages, listed in a composer.lock file."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err

    try:
        data = json.loads(contents)
    except ValueError as err:
        raise LockfileError(f"could not parse {path}: {err}") from err

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LockfileError(f"could not parse {path}: expected a JSON object")

    entries = (data.get("packages") or []) + (data.get("packages-dev") or [])
    return [_to_details(entry) for entry in entries]