"""Parser for conan.lock files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .types import Ecosystem, LockfileError, PackageDetails


@dataclass(frozen=True)
class ConanReference:
    """The parts of a conan reference string."""

    name: str = ""
    version: str = ""
    username: str = ""
    channel: str = ""
    recipe_revision: str = ""
    package_id: str = ""
    package_revision: str = ""
    timestamp: str = ""


def parse_conan_reference(ref: str) -> ConanReference:
    """Split "name/version[@user[/channel]][#rrev][:pkgid[#prev]][%timestamp]"."""
    timestamp = package_id = package_revision = ""
    recipe_revision = username = channel = ""

    ref, sep, rest = ref.partition("%")
    if sep:
        timestamp = rest

    ref, sep, rest = ref.partition(":")
    if sep:
        package_id, sep, revision = rest.partition("#")
        if sep:
            package_revision = revision

    ref, sep, rest = ref.partition("#")
    if sep:
        recipe_revision = rest

    ref, sep, rest = ref.partition("@")
    if sep:
        username, sep, maybe_channel = rest.partition("/")
        if sep:
            channel = maybe_channel

    name, sep, version = ref.partition("/")
    if not sep:
        # a consumer conanfile may not have a name
        name, version = "", ref

    return ConanReference(
        name=name,
        version=version,
        username=username,
        channel=channel,
        recipe_revision=recipe_revision,
        package_id=package_id,
        package_revision=package_revision,
        timestamp=timestamp,
    )


def _to_details(ref: str) -> PackageDetails | None:
    reference = parse_conan_reference(ref)
    # nameless entries are most likely the consumer's own conanfile
    if not reference.name:
        return None
    return PackageDetails(
        name=reference.name,
        version=reference.version,
        ecosystem=Ecosystem.CONAN,
        compare_as=Ecosystem.CONAN,
    )


def _parse_v1(nodes: dict[str, Any], path: str) -> list[PackageDetails]:
    packages = []
    for node in nodes.values():
        if not isinstance(node, dict):
            raise LockfileError(f"could not parse {path}: graph nodes must be objects")
        if node.get("path"):
            # a local conanfile, not a dependency
            continue
        # old lockfiles (conan 1.27 and earlier) use "pref" instead of "ref"
        ref = node.get("pref") or node.get("ref") or ""
        if not ref:
            continue
        details = _to_details(ref)
        if details is not None:
            packages.append(details)
    return packages


def _string_list(data: dict[str, Any], key: str, path: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise LockfileError(f"could not parse {path}: {key!r} must be a list of strings")
    return value


def _parse_v2(data: dict[str, Any], path: str) -> list[PackageDetails]:
    refs = (
        _string_list(data, "requires", path)
        + _string_list(data, "build_requires", path)
        + _string_list(data, "python_requires", path)
    )
    return [details for details in map(_to_details, refs) if details is not None]


def parse_conan_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a conan.lock file of any format version."""
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

    graph_lock = data.get("graph_lock")
    nodes = graph_lock.get("nodes") if isinstance(graph_lock, dict) else None
    if nodes is not None:
        if not isinstance(nodes, dict):
            raise LockfileError(f"could not parse {path}: graph nodes must be an object")
        return _parse_v1(nodes, path)
    return _parse_v2(data, path)