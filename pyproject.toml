[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lockparse"
version = "0.1.0"
description = "Parsers that extract package names, versions and commits from dependency lockfiles"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = [
    "lockfile",
    "dependencies",
    "sbom",
    "cargo",
    "composer",
    "maven",
    "poetry",
    "pnpm",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lockparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
