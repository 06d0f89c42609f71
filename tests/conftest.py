"""Shared fixtures for claw-readme tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def make_project(tmp_path):
    """
    Factory that lays out a Node.js project under tmp_path.

    Usage:
        root = make_project({"name": "tool"}, {"cli.js": "case 'build':"})
    """
    def _make(manifest=None, files=None, name="project") -> Path:
        root = tmp_path / name
        root.mkdir()
        if manifest is not None:
            content = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (root / "package.json").write_text(content, encoding="utf-8")
        for relative, text in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return _make
