"""
claw-readme Data Model

This module defines the records that flow through the analysis pipeline,
from the parsed package.json to the final AnalysisResult handed to the
renderer.

Design Principles:
    1. Immutability: every record is a frozen dataclass; stages build new
       records instead of mutating shared ones
    2. Unique keys: commands and flags are identified by name alone
    3. Deterministic output: AnalysisResult sequences are sorted by name
    4. Serializable: AnalysisResult.to_dict() is the JSON output format
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ProjectManifest:
    """
    The subset of package.json the pipeline consumes.

    Missing fields are already replaced by defaults when a manifest is
    built by claw_readme.manifest.load_manifest().

    Attributes:
        name: Package name (falls back to the directory name)
        description: One-line description
        version: Package version
        license: SPDX identifier or free text
        author: Author rendered as a single string (may be empty)
        scripts: npm script name -> shell command (read-only)
        bin: installed command name -> entry path relative to the project (read-only)
        keywords: Keywords in manifest order
        main: Main entry path relative to the project
        repository: Raw "repository" field (string, mapping or None)
    """
    name: str
    description: str = "A CLI tool"
    version: str = "1.0.0"
    license: str = "MIT"
    author: str = ""
    scripts: Mapping[str, str] = field(default_factory=dict, hash=False)
    bin: Mapping[str, str] = field(default_factory=dict, hash=False)
    keywords: tuple[str, ...] = ()
    main: str = "index.js"
    repository: Any = field(default=None, hash=False)

    def __post_init__(self):
        # Read-only views over private copies.
        object.__setattr__(self, "scripts", MappingProxyType(dict(self.scripts)))
        object.__setattr__(self, "bin", MappingProxyType(dict(self.bin)))


@dataclass(frozen=True)
class RepositoryRef:
    """
    A GitHub user/repository pair.

    Attributes:
        user: Account or organization name
        repo: Repository name, without a trailing .git
    """
    user: str
    repo: str

    @property
    def slug(self) -> str:
        """Get the "user/repo" form."""
        return f"{self.user}/{self.repo}"

    @property
    def html_url(self) -> str:
        """Get the repository's web URL."""
        return f"https://github.com/{self.slug}"

    def badge_urls(self) -> list[tuple[str, str]]:
        """
        Get shields.io badges for this repository.

        Returns:
            List of (label, image URL) tuples: license, version, stars
        """
        return [
            ("License", f"https://img.shields.io/github/license/{self.slug}"),
            ("Version", f"https://img.shields.io/github/package-json/v/{self.slug}"),
            ("Stars", f"https://img.shields.io/github/stars/{self.slug}"),
        ]


@dataclass(frozen=True)
class CommandRecord:
    """
    A sub-command of the analyzed CLI.

    Attributes:
        name: Command name (unique key)
        description: Help text; empty when only found by static scanning
    """
    name: str
    description: str = ""


@dataclass(frozen=True)
class FlagRecord:
    """
    A command-line option of the analyzed CLI.

    Attributes:
        name: Canonical flag, always starting with "-" or "--" (unique key)
        description: Help text; empty when only found by static scanning
    """
    name: str
    description: str = ""


@dataclass(frozen=True)
class AnalysisResult:
    """
    Everything known about a project after merging.

    This is the single artifact passed to the renderer. Commands and flags
    are sorted by name and contain no duplicates.
    """
    manifest: ProjectManifest
    commands: tuple[CommandRecord, ...] = ()
    flags: tuple[FlagRecord, ...] = ()
    usage: tuple[str, ...] = ()
    repository: Optional[RepositoryRef] = None
    has_license_file: bool = False

    # Manifest passthroughs keep the renderer readable.

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def description(self) -> str:
        return self.manifest.description

    @property
    def version(self) -> str:
        return self.manifest.version

    @property
    def license(self) -> str:
        return self.manifest.license

    @property
    def author(self) -> str:
        return self.manifest.author

    @property
    def scripts(self) -> Mapping[str, str]:
        return self.manifest.scripts

    @property
    def main(self) -> str:
        return self.manifest.main

    @property
    def bin_commands(self) -> list[str]:
        """Installed command names, in manifest order."""
        return list(self.manifest.bin)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the JSON output structure.

        Returns:
            JSON-serializable dictionary
        """
        github = None
        if self.repository is not None:
            github = {"user": self.repository.user, "repo": self.repository.repo}

        return {
            "name": self.manifest.name,
            "description": self.manifest.description,
            "version": self.manifest.version,
            "license": self.manifest.license,
            "author": self.manifest.author,
            "scripts": dict(self.manifest.scripts),
            "bin": dict(self.manifest.bin),
            "keywords": list(self.manifest.keywords),
            "main": self.manifest.main,
            "commands": [{"name": c.name, "desc": c.description} for c in self.commands],
            "flags": [{"name": f.name, "desc": f.description} for f in self.flags],
            "usage": list(self.usage),
            "github": github,
            "hasLicenseFile": self.has_license_file,
        }
