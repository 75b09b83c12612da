# lockparse

`lockparse` reads dependency lockfiles and package databases and turns them
into plain lists of packages: name, version, ecosystem and, where the file
records one, the commit it was resolved from.

## Formats

| Format | Function | Ecosystem |
| --- | --- | --- |
| `Cargo.lock` | `lockparse.cargo.parse_cargo_lock` | `crates.io` |
| `composer.lock` | `lockparse.composer.parse_composer_lock` | `Packagist` |
| `conan.lock` | `lockparse.conan.parse_conan_lock` | `ConanCenter` |
| dpkg `status` | `lockparse.dpkg.parse_dpkg_status`, `lockparse.dpkg.from_dpkg_status` | `Debian` |
| `Gemfile.lock` | `lockparse.gemfile.parse_gemfile_lock` | `RubyGems` |
| `gradle.lockfile` | `lockparse.gradle.parse_gradle_lock` | `Maven` |
| `mix.lock` | `lockparse.mix.parse_mix_lock` | `Hex` |
| `pom.xml` | `lockparse.maven.parse_maven_lock` | `Maven` |
| `packages.lock.json` | `lockparse.nuget.parse_nuget_lock` | `NuGet` |
| `Pipfile.lock` | `lockparse.pipenv.parse_pipenv_lock` | `PyPI` |
| `pnpm-lock.yaml` | `lockparse.pnpm.parse_pnpm_lock` | `npm` |
| `poetry.lock` | `lockparse.poetry.parse_poetry_lock` | `PyPI` |
| `pubspec.lock` | `lockparse.pubspec.parse_pubspec_lock` | `Pub` |

## Installation

```
pip install lockparse
```

## Usage

Every parser takes a path and returns a list of
`lockparse.types.PackageDetails`, a frozen dataclass with the fields `name`,
`version`, `ecosystem`, `compare_as` and `commit`:

```python
from lockparse.cargo import parse_cargo_lock

for package in parse_cargo_lock("Cargo.lock"):
    print(package.name, package.version, package.ecosystem)
```

A file that cannot be opened or does not hold the expected format raises
`lockparse.types.LockfileError`. Its message says which: `could not read ...`
or `could not open ...` when the file is missing, and `could not parse ...`
when its contents are wrong.

```python
from lockparse.types import LockfileError
from lockparse.pipenv import parse_pipenv_lock

try:
    packages = parse_pipenv_lock("Pipfile.lock")
except LockfileError as error:
    print(f"skipping: {error}")
```

For a Debian package database, `from_dpkg_status` wraps the packages in a
`lockparse.types.Lockfile` that records the path and the format, with the
packages sorted by name and then by version:

```python
from lockparse.dpkg import from_dpkg_status

lockfile = from_dpkg_status("/var/lib/dpkg/status")
print(lockfile.parsed_as, len(lockfile.packages))
```

Packages that are not installed, or only have configuration files left, are
left out. Malformed records produce a warning on standard error instead of
stopping the parse. The Gradle and mix parsers likewise skip lines they cannot
read, with a warning.

### Smaller building blocks

Some of the parsers expose the pieces they are made of:

* `lockparse.conan.parse_conan_reference` splits a Conan reference such as
  `zlib/1.2.11@user/channel#rrev:pkgid#prev%timestamp` into a `ConanReference`.
* `lockparse.gemfile.parse_gemfile_lock_text` parses the text of a
  `Gemfile.lock` that is already in memory.
* `lockparse.gradle.parse_gradle_line` parses a single `group:artifact:version`
  line.
* `lockparse.pnpm.extract_pnpm_name_and_version` pulls the name and version out
  of a pnpm dependency path.
* `lockparse.maven.MavenLockDependency.resolve_version` resolves `${property}`
  interpolation and version ranges against a `MavenLockFile`.
* `lockparse.types.merge_details` and `lockparse.types.details_to_list` combine
  and flatten keyed package maps.

`lockparse.types.known_ecosystems()` returns a fixed list of `Ecosystem`
values for the package ecosystems of common lockfiles.

## What it does not do

* There is no parser for `go.mod` files and none for npm's own
  `package-lock.json`; pnpm lockfiles are the only npm format read.
* It only lists packages. It does not look packages up in any vulnerability
  database and has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```