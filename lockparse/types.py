"""Core types shared by the lockfile parsers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class Ecosystem(StrEnum):
    """Package ecosystems a lockfile can describe."""

    NPM = "npm"
    NUGET = "NuGet"
    CARGO = "crates.io"
    BUNDLER = "RubyGems"
    COMPOSER = "Packagist"
    GO = "Go"
    MIX = "Hex"
    MAVEN = "Maven"
    PIP = "PyPI"
    PUB = "Pub"
    CONAN = "ConanCenter"
    DEBIAN = "Debian"


@dataclass(frozen=True, order=True)
class PackageDetails:
    """One package found in a lockfile."""

    name: str = ""
    version: str = ""
    ecosystem: str = ""
    compare_as: str = ""
    commit: str = ""


@dataclass
class Lockfile:
    """The packages parsed from a single file, and how it was parsed."""

    file_path: str
    parsed_as: str
    packages: list[PackageDetails] = field(default_factory=list)


class LockfileError(Exception):
    """Raised when a lockfile cannot be read or parsed."""


def known_ecosystems() -> list[Ecosystem]:
    """Return the ecosystems that lockfile parsing is known to support."""
    return [
        Ecosystem.NPM,
        Ecosystem.NUGET,
        Ecosystem.CARGO,
        Ecosystem.BUNDLER,
        Ecosystem.COMPOSER,
        Ecosystem.GO,
        Ecosystem.MIX,
        Ecosystem.MAVEN,
        Ecosystem.PIP,
        Ecosystem.PUB,
        Ecosystem.CONAN,
    ]


def merge_details(
    first: Mapping[str, PackageDetails], second: Mapping[str, PackageDetails]
) -> dict[str, PackageDetails]:
    """Merge two keyed package maps into a new one; entries of `second` win."""
    return {**first, **second}


def details_to_list(details: Mapping[str, PackageDetails]) -> list[PackageDetails]:
    """Return the packages of a keyed package map as a list."""
    return list(details.values())