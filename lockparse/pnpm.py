"""Parser for pnpm-lock.yaml files."""

from __future__ import annotations

import re
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

_STARTS_WITH_DIGIT = re.compile(r"^\d", re.ASCII)
_NAME_AT_VERSION = re.compile(r"^(.+)@([\d.]+)\Z", re.ASCII)
_CODELOAD_PREFIX = "https://codeload.github.com"
_CODELOAD = re.compile(
    r"https://codeload\.github\.com(?:/[\w\-.]+){2}/tar\.gz/(\w+)\Z", re.ASCII
)


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


def _parse_name_at_version(value: str) -> tuple[str, str]:
    """Split "name@version", where the name may itself contain "@"."""
    match = _NAME_AT_VERSION.match(value)
    if match is None:
        return "", ""
    return match.group(1), match.group(2)


def extract_pnpm_name_and_version(dependency_path: str) -> tuple[str, str]:
    """Extract the package name and version from a pnpm dependency path.

    Returns two empty strings when they cannot be determined.
    """
    # file dependencies never encode their version in the path
    if dependency_path.startswith("file:"):
        return "", ""

    parts = dependency_path.split("/")[1:]
    first = parts[0] if parts else ""
    if first.startswith("@"):
        name = "/".join(parts[:2])
        parts = parts[2:]
    else:
        name = first
        parts = parts[1:]

    version = parts[0] if parts else ""
    if not version:
        name, version = _parse_name_at_version(name)

    if not version or not _STARTS_WITH_DIGIT.match(version):
        return "", ""
    return name, version.split("_", 1)[0]


def _commit(resolution: dict, path: str) -> str:
    commit = _string(resolution.get("commit"), "resolution commit", path)
    tarball = _string(resolution.get("tarball"), "resolution tarball", path)
    if tarball.startswith(_CODELOAD_PREFIX):
        match = _CODELOAD.search(tarball)
        if match is not None:
            commit = match.group(1)
    return commit


def parse_pnpm_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a pnpm-lock.yaml file."""
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

    version = _string(data.get("lockfileVersion"), "lockfileVersion", path)
    try:
        float(version)
    except ValueError as err:
        raise LockfileError(
            f"could not parse {path}: invalid lockfile version {version!r}"
        ) from err

    packages = []
    for key, entry in _mapping(data.get("packages"), "packages", path).items():
        entry = _mapping(entry, "package", path)
        name, pkg_version = extract_pnpm_name_and_version("" if key is None else str(key))

        # explicit fields take priority over whatever the path encodes
        name = _string(entry.get("name"), "name", path) or name
        pkg_version = _string(entry.get("version"), "version", path) or pkg_version
        if not name or not pkg_version:
            continue

        resolution = _mapping(entry.get("resolution"), "resolution", path)
        packages.append(
            PackageDetails(
                name=name,
                version=pkg_version,
                ecosystem=Ecosystem.NPM,
                compare_as=Ecosystem.NPM,
                commit=_commit(resolution, path),
            )
        )
    return packages