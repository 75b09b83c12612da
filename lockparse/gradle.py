"""Parser for Gradle dependency lockfiles."""

from __future__ import annotations

import sys

from .types import Ecosystem, LockfileError, PackageDetails

_COMMENT_PREFIX = "#"
_EMPTY_PREFIX = "empty="


def _is_dependency_line(line: str) -> bool:
    return not (line.startswith(_COMMENT_PREFIX) or line.startswith(_EMPTY_PREFIX))


def parse_gradle_line(line: str) -> PackageDetails:
    """Parse a "group:artifact:version=configurations" lockfile line."""
    parts = line.split(":", 2)
    if len(parts) < 3:
        raise LockfileError(f"invalid line in gradle lockfile: {line}")
    group, artifact, version = parts
    return PackageDetails(
        name=f"{group}:{artifact}",
        version=version.split("=", 1)[0],
        ecosystem=Ecosystem.MAVEN,
        compare_as=Ecosystem.MAVEN,
    )


def parse_gradle_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a Gradle lockfile, skipping bad lines."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as err:
        raise LockfileError(f"could not open {path}: {err}") from err

    packages = []
    with handle:
        try:
            lines = [line.strip() for line in handle]
        except OSError as err:
            raise LockfileError(f"failed to read {path}: {err}") from err

    for line in lines:
        if not _is_dependency_line(line):
            continue
        try:
            packages.append(parse_gradle_line(line))
        except LockfileError as err:
            print(f"failed to parse lockline: {err}", file=sys.stderr)
    return packages