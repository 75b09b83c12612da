"""Parser for the dpkg status file of Debian systems."""

from __future__ import annotations

import re
import sys
from itertools import groupby

from .types import Ecosystem, Lockfile, LockfileError, PackageDetails

_SOURCE_PATTERN = re.compile(r"^(.*)\((.*)\)")
_UNKNOWN_NAME = "<unknown>"
_SKIPPED_STATES = {"not-installed", "config-files"}


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def _group_lines(lines: list[str]) -> list[list[str]]:
    return [list(group) for non_empty, group in groupby(lines, key=bool) if non_empty]


def _parse_source_field(source: str) -> tuple[str, str]:
    """Split a "name (version)" Source value; the version may be absent."""
    match = _SOURCE_PATTERN.match(source)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return source.strip(), ""


def _parse_group(group: list[str], path: str) -> PackageDetails | None:
    """Parse one record; None means the package is not installed or is unusable."""
    name = ""
    version = ""
    source_present = False
    source_has_version = False

    for line in group:
        if line.startswith("Status:"):
            tokens = line.removeprefix("Status:").split()
            if len(tokens) != 3:
                _warn(
                    'warning: malformed DPKG status file. Found no valid "Source" field. '
                    f"File: {path}"
                )
                return None
            if tokens[2] in _SKIPPED_STATES:
                return None
        elif line.startswith("Source:"):
            source_present = True
            name, source_version = _parse_source_field(line.removeprefix("Source:"))
            if source_version:
                source_has_version = True
                version = source_version
        elif line.startswith("Version:"):
            if not source_has_version:
                version = line.removeprefix("Version:").strip()
        elif line.startswith("Package:"):
            if not source_present:
                name = line.removeprefix("Package:").strip()

    if not version:
        _warn(
            "warning: malformed DPKG status file. Found no version number in record. "
            f"Package {name or _UNKNOWN_NAME}. File: {path}"
        )

    return PackageDetails(
        name=name,
        version=version,
        ecosystem=Ecosystem.DEBIAN,
        compare_as=Ecosystem.DEBIAN,
    )


def parse_dpkg_status(path: str) -> list[PackageDetails]:
    """Return the installed packages recorded in a dpkg status file."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as err:
        raise LockfileError(f"could not open {path}: {err}") from err

    with handle:
        try:
            lines = [line.rstrip("\n") for line in handle]
        except OSError as err:
            raise LockfileError(f"error while scanning {path}: {err}") from err

    packages = []
    for group in _group_lines(lines):
        pkg = _parse_group(group, path)
        if pkg is None:
            continue
        if not pkg.name:
            _warn(
                "warning: malformed DPKG status file. Found no package name in record. "
                f"File: {path}"
            )
            continue
        packages.append(pkg)
    return packages


def from_dpkg_status(path: str) -> Lockfile:
    """Parse a dpkg status file into a Lockfile sorted by name, then version."""
    packages = sorted(parse_dpkg_status(path), key=lambda p: (p.name, p.version))
    return Lockfile(file_path=path, parsed_as="dpkg-status", packages=packages)