"""Parser for Elixir mix.lock files."""

from __future__ import annotations

import re
import sys

from .types import Ecosystem, LockfileError, PackageDetails

_DEPENDENCY_LINE = re.compile(r'^ +"(\w+)": \{.+,$', re.ASCII)


def _unquote(value: str) -> str:
    return value.strip().removeprefix('"').removesuffix('"')


def parse_mix_lock(path: str) -> list[PackageDetails]:
    """Return the packages listed in a mix.lock file."""
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
    for line in lines:
        match = _DEPENDENCY_LINE.match(line)
        if not match:
            continue

        # Only the third and fourth entries matter and both are plain strings,
        # so a naive split on commas is good enough here.
        fields = [part for part in line.split(",") if part]
        if len(fields) < 4:
            print(
                "Found less than four fields when parsing a line that looks like "
                "a dependency in a mix.lock - please report this!",
                file=sys.stderr,
            )
            continue

        version = _unquote(fields[2])
        commit = _unquote(fields[3])
        if fields[0].endswith(":git"):
            commit, version = version, ""

        packages.append(
            PackageDetails(
                name=match.group(1),
                version=version,
                ecosystem=Ecosystem.MIX,
                compare_as=Ecosystem.MIX,
                commit=commit,
            )
        )
    return packages