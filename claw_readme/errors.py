"""Exception hierarchy for claw-readme.

Only fatal conditions are modelled here. Best-effort sources (git config,
the help probe, individual source files) never raise; they return empty
data instead.
"""


class ClawReadmeError(Exception):
    """Base exception for user-facing failures."""


class TargetNotFound(ClawReadmeError):
    """The target project directory does not exist."""


class ManifestMissing(ClawReadmeError):
    """No package.json in the target directory."""


class ManifestInvalid(ClawReadmeError):
    """package.json is not a parseable JSON object."""


class ReadmeExists(ClawReadmeError):
    """README.md already exists and overwriting was not requested."""
