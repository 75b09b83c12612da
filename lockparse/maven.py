"""Parser for Maven pom.xml files."""

from __future__ import annotations

import re
import sys
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .types import Ecosystem, LockfileError, PackageDetails, details_to_list

_INTERPOLATION = re.compile(r"\$\{(.+)\}")
_REQUIREMENT = re.compile(r"[\[(]?(.*?)(?:,|[)\]]|\Z)")


@dataclass
class MavenLockFile:
    """The parts of a pom.xml that describe its dependencies."""

    model_version: str = ""
    group_id: str = ""
    artifact_id: str = ""
    properties: dict[str, str] = field(default_factory=dict)
    dependencies: list[MavenLockDependency] = field(default_factory=list)
    managed_dependencies: list[MavenLockDependency] = field(default_factory=list)


@dataclass(frozen=True)
class MavenLockDependency:
    """A single <dependency> element."""

    group_id: str = ""
    artifact_id: str = ""
    version: str = ""

    def _version_value(self, lockfile: MavenLockFile) -> str:
        match = _INTERPOLATION.search(self.version)
        if match is None:
            return self.version
        prop = match.group(1)
        if prop in lockfile.properties:
            return lockfile.properties[prop]
        print(
            f"Failed to resolve version of {self.group_id}:{self.artifact_id}: "
            f'property "{prop}" could not be found for '
            f'"{lockfile.group_id}:{lockfile.artifact_id}"',
            file=sys.stderr,
        )
        return "0"

    def resolve_version(self, lockfile: MavenLockFile) -> str:
        """Return the concrete version, interpolating properties and taking
        the lower bound of a version range ("0" when it has none)."""
        match = _REQUIREMENT.search(self._version_value(lockfile))
        if match is None or not match.group(1):
            return "0"
        return match.group(1)


def _local(tag: object) -> str:
    return tag.rpartition("}")[2] if isinstance(tag, str) else ""


def _text(elem: ET.Element) -> str:
    """Character data directly inside an element, ignoring nested elements."""
    return (elem.text or "") + "".join(child.tail or "" for child in elem)


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local(child.tag) == name]


def _child_text(elem: ET.Element, name: str) -> str:
    found = _children(elem, name)
    return _text(found[-1]) if found else ""


def _dependencies(container: ET.Element) -> list[MavenLockDependency]:
    return [
        MavenLockDependency(
            group_id=_child_text(dep, "groupId"),
            artifact_id=_child_text(dep, "artifactId"),
            version=_child_text(dep, "version"),
        )
        for deps in _children(container, "dependencies")
        for dep in _children(deps, "dependency")
    ]


def _to_lockfile(root: ET.Element) -> MavenLockFile:
    properties: dict[str, str] = {}
    for props in _children(root, "properties"):
        properties = {_local(child.tag): _text(child) for child in props}

    managed = [
        dep
        for management in _children(root, "dependencyManagement")
        for dep in _dependencies(management)
    ]
    return MavenLockFile(
        model_version=_child_text(root, "modelVersion"),
        group_id=_child_text(root, "groupId"),
        artifact_id=_child_text(root, "artifactId"),
        properties=properties,
        dependencies=_dependencies(root),
        managed_dependencies=managed,
    )


def parse_maven_lock(path: str) -> list[PackageDetails]:
    """Return the dependencies declared in a pom.xml file."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err

    try:
        root = ET.fromstring(contents)
    except ET.ParseError as err:
        raise LockfileError(f"could not parse {path}: XML syntax error: {err}") from err

    if _local(root.tag) != "project":
        raise LockfileError(
            f"could not parse {path}: expected element type <project> "
            f"but have <{_local(root.tag)}>"
        )

    lockfile = _to_lockfile(root)
    details: dict[str, PackageDetails] = {}
    # managed dependencies take precedence over standard dependencies
    for dep in lockfile.dependencies + lockfile.managed_dependencies:
        name = f"{dep.group_id}:{dep.artifact_id}"
        details[name] = PackageDetails(
            name=name,
            version=dep.resolve_version(lockfile),
            ecosystem=Ecosystem.MAVEN,
            compare_as=Ecosystem.MAVEN,
        )
    return details_to_list(details)