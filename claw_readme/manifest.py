"""
package.json Reader

This module loads a project's package.json and turns it into a
ProjectManifest with defaults filled in for anything missing.

Supported Shapes:
    - "bin" as a mapping or as a single path (installed under the package name)
    - "author" as a string or as {"name": ..., "email": ...}
    - "license" as a string or as a legacy {"type": ...} object

Failure Modes:
    - No package.json -> ManifestMissing
    - Unreadable, not JSON, or not a JSON object -> ManifestInvalid
"""

import json
from pathlib import Path
from typing import Any

from claw_readme.errors import ManifestInvalid, ManifestMissing
from claw_readme.schema import ProjectManifest

MANIFEST_FILENAME = "package.json"

DEFAULT_DESCRIPTION = "A CLI tool"
DEFAULT_VERSION = "1.0.0"
DEFAULT_LICENSE = "MIT"
DEFAULT_MAIN = "index.js"


def load_manifest(root_path: Path) -> ProjectManifest:
    """
    Load and normalize <root_path>/package.json.

    Args:
        root_path: Project directory

    Returns:
        ProjectManifest with defaults applied

    Raises:
        ManifestMissing: If package.json does not exist
        ManifestInvalid: If it cannot be read or parsed into a JSON object
    """
    root_path = Path(root_path)
    manifest_path = root_path / MANIFEST_FILENAME

    if not manifest_path.is_file():
        raise ManifestMissing(
            f"No {MANIFEST_FILENAME} found in {root_path}. "
            "This tool requires a Node.js project."
        )

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestInvalid(f"Invalid {MANIFEST_FILENAME}: {e}") from e
    except OSError as e:
        raise ManifestInvalid(f"Cannot read {MANIFEST_FILENAME}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestInvalid(
            f"Invalid {MANIFEST_FILENAME}: expected a JSON object, "
            f"got {type(data).__name__}"
        )

    return manifest_from_dict(data, default_name=root_path.resolve().name)


def manifest_from_dict(data: dict[str, Any], default_name: str) -> ProjectManifest:
    """
    Build a ProjectManifest from already-parsed package.json data.

    Args:
        data: The decoded JSON object
        default_name: Name to use when the manifest has none

    Returns:
        ProjectManifest with defaults applied
    """
    name = _string_or(data.get("name"), default_name)

    return ProjectManifest(
        name=name,
        description=_string_or(data.get("description"), DEFAULT_DESCRIPTION),
        version=_string_or(data.get("version"), DEFAULT_VERSION),
        license=_parse_license(data.get("license")),
        author=_parse_author(data.get("author")),
        scripts=_string_mapping(data.get("scripts")),
        bin=_parse_bin(data.get("bin"), name),
        keywords=_string_list(data.get("keywords")),
        main=_string_or(data.get("main"), DEFAULT_MAIN),
        repository=data.get("repository"),
    )


def _string_or(value: Any, default: str) -> str:
    """Return value if it is a non-empty string, else default."""
    if isinstance(value, str) and value.strip():
        return value
    return default


def _string_mapping(value: Any) -> dict[str, str]:
    """Keep only the string -> string entries of a JSON object."""
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, str)}


def _string_list(value: Any) -> tuple[str, ...]:
    """Keep only the string items of a JSON array."""
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def _parse_bin(value: Any, package_name: str) -> dict[str, str]:
    """
    Normalize the "bin" field to a mapping.

    A bare string installs one command named after the package. Scoped
    package names (@scope/tool) install the command "tool".
    """
    if isinstance(value, str) and value:
        return {package_name.split("/")[-1]: value}
    return _string_mapping(value)


def _parse_license(value: Any) -> str:
    if isinstance(value, dict):
        value = value.get("type")
    return _string_or(value, DEFAULT_LICENSE)


def _parse_author(value: Any) -> str:
    """
    Render the "author" field as a single string.

    Handles formats:
        - "Name <email> (url)" (kept as written)
        - {"name": "Name", "email": "email", "url": "url"}
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        name = value.get("name")
        if not isinstance(name, str) or not name:
            return ""
        email = value.get("email")
        if isinstance(email, str) and email:
            return f"{name} <{email}>"
        return name
    return ""
