"""Parser for Bundler Gemfile.lock files."""

from __future__ import annotations

import re
from enum import Enum

from .types import Ecosystem, LockfileError, PackageDetails

_SECTION_BUNDLED = "BUNDLED WITH"
_SECTION_DEPENDENCIES = "DEPENDENCIES"
_SECTION_PLATFORMS = "PLATFORMS"
_SECTION_RUBY = "RUBY VERSION"
_SOURCE_SECTIONS = ("GIT", "GEM", "PATH", "PLUGIN SOURCE")

_LINE_SPLIT = re.compile(r"(?:\r?\n)+")
_SPEC = re.compile(r"^( +)(.*?)(?: \(([^-]*)(?:-(.*))?\))?(!)?$")
_OPTION = re.compile(r"^ {2}([a-z]+): (.*)$", re.IGNORECASE | re.ASCII)
_NOT_INDENTED = re.compile(r"^\S", re.ASCII)
_REVISION_PREFIX = "  revision: "


class _State(Enum):
    SOURCE = "source"
    DEPENDENCY = "dependency"
    PLATFORM = "platform"
    RUBY = "ruby"
    BUNDLED_WITH = "bundled_with"


_SECTION_STATES = {
    _SECTION_DEPENDENCIES: _State.DEPENDENCY,
    _SECTION_PLATFORMS: _State.PLATFORM,
    _SECTION_RUBY: _State.RUBY,
    _SECTION_BUNDLED: _State.BUNDLED_WITH,
}


def _is_source_section(line: str) -> bool:
    return any(section in line for section in _SOURCE_SECTIONS)


class _GemfileParser:
    def __init__(self) -> None:
        self.state: _State | None = None
        self.dependencies: list[PackageDetails] = []
        self.bundler_version = ""
        self.ruby_version = ""
        # commit of the git source currently being read, if any
        self.current_commit = ""

    def _parse_spec(self, line: str) -> None:
        match = _SPEC.match(line)
        if match is None:
            return
        # only top-level specs are packages; deeper ones are their requirements
        if len(match.group(1)) == 4:
            self.dependencies.append(
                PackageDetails(
                    name=match.group(2),
                    version=match.group(3) or "",
                    ecosystem=Ecosystem.BUNDLER,
                    compare_as=Ecosystem.BUNDLER,
                    commit=self.current_commit,
                )
            )

    def _parse_source(self, line: str) -> None:
        if line == "  specs":
            return
        option = _OPTION.match(line)
        if option is not None:
            whole = option.group(0)
            if whole.startswith(_REVISION_PREFIX):
                self.current_commit = whole.removeprefix(_REVISION_PREFIX)
            return
        self._parse_spec(line)

    def _parse_in_state(self, line: str) -> None:
        match self.state:
            case _State.RUBY:
                self.ruby_version = line.strip()
            case _State.BUNDLED_WITH:
                self.bundler_version = line.strip()
            case _State.SOURCE:
                self._parse_source(line)
            case _:
                pass

    def parse(self, contents: str) -> None:
        for line in _LINE_SPLIT.split(contents):
            if _is_source_section(line):
                # a new group starts, so forget the previous group's commit
                self.current_commit = ""
                self.state = _State.SOURCE
                self._parse_source(line)
                continue

            section_state = _SECTION_STATES.get(line)
            if section_state is not None:
                self.state = section_state
                continue

            if _NOT_INDENTED.match(line):
                self.state = None
            if self.state is not None:
                self._parse_in_state(line)


def parse_gemfile_lock_text(contents: str) -> list[PackageDetails]:
    """Return the gems listed in the text of a Gemfile.lock, in file order."""
    parser = _GemfileParser()
    parser.parse(contents)
    return parser.dependencies


def parse_gemfile_lock(path: str) -> list[PackageDetails]:
    """Return the gems listed in a Gemfile.lock file."""
    try:
        with open(path, "rb") as handle:
            contents = handle.read()
    except OSError as err:
        raise LockfileError(f"could not read {path}: {err}") from err
    return parse_gemfile_lock_text(contents.decode("utf-8", errors="replace"))