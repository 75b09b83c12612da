"""Parser for Pipfile.lock files."""

from __future__ import annotations

import json
from typing import Any

from .types import Ecosystem, LockfileError, PackageDetails, details_to_list


def _add_details(
    details: dict[str, PackageDetails], packages: Any, path: str
) -> None:
    if packages is None:
        return
    if not isinstance(packages, dict):
        raise LockfileError(f"could not parse {path}: package groups must be objects")
    for name, entry in packages.items():
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise LockfileError(f"could not parse {path}: packages must be objects")
        version = entry.get("version")
        if version is None:
            continue
        if not isinstance(version, str):
            raise LockfileError(f"could not parse {path}: versions must be strings")
        if not version:
            continue
        # versions are pinned as "==x.y.z"
        version = version[2:]
        details[f"{name}@{version}"] = PackageDetails(
            name=name,
            version=version,
            ecosystem=Ecosystem.PIP,
            compare_as=Ecosystem.PIP,
        )


def parse_pipenv_lock(path: str) -> list[PackageDetails]:
    """Return the default and develop packages of a Pipfile.lock file."""
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
        return []
    if not isinstance(data, dict):
        raise LockfileError(f"could not parse {path}: expected a JSON object")

    details: dict[str, PackageDetails] = {}
    _add_details(details, data.get("default"), path)
    _add_details(details, data.get("develop"), path)
    return details_to_list(details)