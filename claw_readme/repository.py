"""
GitHub Repository Identification

Finds the GitHub user/repo pair a project lives under, used for badges
and the summary line. Sources are tried in order:

    1. The "repository" field of package.json (string or {"url": ...})
    2. The project's .git/config remote URLs

Supported URL formats:
    - https://github.com/owner/repo(.git)
    - git+https://github.com/owner/repo.git
    - git@github.com:owner/repo.git
    - github:owner/repo and owner/repo (npm shorthands)

Identification never fails: unreadable or unmatched sources just yield None.
"""

import re
from pathlib import Path
from typing import Any, Optional

from claw_readme.schema import ProjectManifest, RepositoryRef

# The repo name stops at ".git", a path separator, whitespace or a fragment.
GITHUB_URL_PATTERN = re.compile(
    r"github\.com[/:]([^/\s]+)/([^/\s#]+?)(?:\.git)?(?=[/\s#]|$)"
)

SHORTHAND_PATTERN = re.compile(r"^(?:github:)?([\w.-]+)/([\w.-]+?)(?:\.git)?$")


def parse_github_url(url: str) -> Optional[RepositoryRef]:
    """
    Parse a GitHub URL (or any text containing one) into a RepositoryRef.

    Args:
        url: URL or text to search

    Returns:
        The first match, or None
    """
    match = GITHUB_URL_PATTERN.search(url)
    if match:
        return RepositoryRef(user=match.group(1), repo=match.group(2))
    return None


def repository_url_from_field(value: Any) -> Optional[str]:
    """Get the URL out of a package.json "repository" field."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        return value["url"]
    return None


def identify_from_manifest(manifest: ProjectManifest) -> Optional[RepositoryRef]:
    url = repository_url_from_field(manifest.repository)
    if not url:
        return None

    ref = parse_github_url(url)
    if ref is not None:
        return ref

    if "://" not in url and "@" not in url:
        shorthand = SHORTHAND_PATTERN.match(url.strip())
        if shorthand:
            return RepositoryRef(user=shorthand.group(1), repo=shorthand.group(2))
    return None


def identify_from_git_config(root_path: Path) -> Optional[RepositoryRef]:
    """
    Look for a GitHub remote in <root_path>/.git/config.

    Args:
        root_path: Project directory

    Returns:
        RepositoryRef, or None if the file is absent, unreadable or has
        no GitHub remote
    """
    config_path = Path(root_path) / ".git" / "config"
    if not config_path.is_file():
        return None

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    return parse_github_url(content)


def identify_repository(
    manifest: ProjectManifest,
    root_path: Path,
) -> Optional[RepositoryRef]:
    """
    Identify the project's GitHub repository.

    Args:
        manifest: The loaded manifest
        root_path: Project directory

    Returns:
        RepositoryRef from the manifest, else from git config, else None
    """
    return identify_from_manifest(manifest) or identify_from_git_config(root_path)
