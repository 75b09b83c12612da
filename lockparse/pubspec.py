"""Parser for Dart pubspec.lock files."""

from __future__ import annotations

from typing import Any

import yaml

from .types import Ecosystem, LockfileError, PackageDetails

_KEPT_TAGS = {"tag:yaml.org,2002:null", "tag:yaml.org,2002:merge"}


class _StringLoader(yaml.SafeLoader):
    """Loads every scalar as a string, except nulls."""


_StringLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag in _KEPT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _string(value: Any, what: str, path: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise LockfileError(f"could not parse {path}: {what} must be a string")


def _mapping(value: Any, what: str, path: str) -> dict:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    raise LockfileError(f"could not parse {path}: {what} must be a mapping")


def _resolved_ref(description: Any, path: str) -> str:
    """The git ref of a description; plain-string descriptions have none."""
    if description is None or isinstance(description, str):
        return ""
    if isinstance(description, dict):
        return _string(description.get("resolved-ref"), "resolved-ref", path)
    raise LockfileError(f"could not parse {path}: description must be a mapping or string")


def parse_pubspec_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a pubspec.lock file."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err

    try:
        data = yaml.load(contents, Loader=_StringLoader)
    except yaml.YAMLError as err:
        raise LockfileError(f"could not parse {path}: {err}") from err

    if data is None:
        return []
    if not isinstance(data, dict):
        raise LockfileError(f"could not parse {path}: expected a mapping")

    packages = []
    for name, entry in _mapping(data.get("packages"), "packages", path).items():
        entry = _mapping(entry, "package", path)
        packages.append(
            PackageDetails(
                name="" if name is None else str(name),
                version=_string(entry.get("version"), "version", path),
                commit=_resolved_ref(entry.get("description"), path),
                ecosystem=Ecosystem.PUB,
            )
        )
    return packages