"""Parsers that read dependency lockfiles and package databases into lists of packages."""

__version__ = "0.1.0"