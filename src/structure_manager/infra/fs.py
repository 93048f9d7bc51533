from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the small set of blocking filesystem primitives the verifier relies
on: existence checks, recursive directory creation, directory listing and
path normalization. Acts as an abstraction over the 'os' module so that the
verification logic stays free of platform details.
"""

import os
from typing import List, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# PATH NORMALIZATION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[PathLike], fallback: str = "") -> str:
    """
    Normalize a path into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path.
        fallback: Path to use when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = os.fspath(path).strip() if path is not None else ""
    if not p:
        p = fallback or os.getcwd()
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM INSPECTION API
# -----------------------------------------------------------------------------

def entry_exists(path: str) -> bool:
    """
    Check whether any filesystem entry exists at path.

    Symlinks are followed, so a dangling link counts as missing.
    """
    return os.path.exists(path)


def list_entry_names(path: str) -> List[str]:
    """
    List the entry names directly below a directory, sorted.

    Raises:
        OSError: If the directory cannot be listed.
    """
    with os.scandir(path) as it:
        return sorted(entry.name for entry in it)

# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def make_dirs(path: str) -> None:
    """
    Create a directory and any missing ancestors.

    Concurrent creators racing on the same path are tolerated.

    Raises:
        OSError: If creation fails for any other reason.
    """
    os.makedirs(path, exist_ok=True)
