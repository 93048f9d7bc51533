from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared schema documents and resolver fixtures used across the suite.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from structure_manager.core.paths.resolver import StaticPathResolver  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """
    Return a representative schema document in its external (camelCase) form.

    appConfig requires a settings file and a repairable 'profiles' tree;
    document requires an existing 'reports' directory; audio is left null.
    """
    return {
        "appConfig": {
            "options": {"repair": True},
            "files": ["settings.json"],
            "dirs": {
                "profiles": {
                    "options": {"repair": True},
                    "dirs": {"default": {}},
                },
            },
        },
        "document": {
            "dirs": {
                "reports": {"files": ["index.md"]},
            },
        },
        "audio": None,
    }


@pytest.fixture
def schema_file(tmp_path: Path, sample_document: Dict[str, Any]) -> Path:
    """Write the sample document to a JSON file and return its path."""
    path = tmp_path / "structure.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def roots(tmp_path: Path) -> Dict[str, Path]:
    """Create empty stand-in directories for appConfig and document."""
    out = {
        "appConfig": tmp_path / "roots" / "config",
        "document": tmp_path / "roots" / "documents",
    }
    for path in out.values():
        path.mkdir(parents=True)
    return out


@pytest.fixture
def static_resolver(roots: Dict[str, Path]) -> StaticPathResolver:
    """Resolver mapping appConfig and document onto the temporary roots."""
    return StaticPathResolver({kind: str(path) for kind, path in roots.items()})
