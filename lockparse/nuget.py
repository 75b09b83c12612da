"""Parser for NuGet packages.lock.json files."""

from __future__ import annotations

import json
from typing import Any

from .types import Ecosystem, LockfileError, PackageDetails, details_to_list, merge_details


def _parse_framework(dependencies: dict[str, Any], path: str) -> dict[str, PackageDetails]:
    details = {}
    for name, dependency in dependencies.items():
        if not isinstance(dependency, dict):
            raise LockfileError(f"could not parse {path}: dependencies must be objects")
        resolved = dependency.get("resolved") or ""
        details[f"{name}@{resolved}"] = PackageDetails(
            name=name,
            version=resolved,
            ecosystem=Ecosystem.NUGET,
            compare_as=Ecosystem.NUGET,
        )
    return details


def parse_nuget_lock(path: str) -> list[PackageDetails]:
    """Return the packages of every target framework in a version 1 NuGet lockfile."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err

    try:
        data = json.loads(contents)
    except ValueError as err:
        raise LockfileError(f"could not parse {path}: {err}") from err

    if not isinstance(data, dict):
        raise LockfileError(f"could not parse {path}: expected a JSON object")

    version = data.get("version")
    if type(version) is not int or version != 1:
        raise LockfileError(f"could not parse {path}: unsupported lock file version")

    frameworks = data.get("dependencies") or {}
    if not isinstance(frameworks, dict):
        raise LockfileError(f"could not parse {path}: dependencies must be an object")

    # frameworks (e.g. net6.0) may list different or overlapping packages
    details: dict[str, PackageDetails] = {}
    for dependencies in frameworks.values():
        if not isinstance(dependencies, dict):
            raise LockfileError(f"could not parse {path}: dependencies must be objects")
        details = merge_details(details, _parse_framework(dependencies, path))
    return details_to_list(details)