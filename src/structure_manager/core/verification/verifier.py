from __future__ import annotations

"""
Structure Verification and Repair Engine.

Performs a depth-first, pre-order walk of an expected-structure tree against
the real filesystem. At every level declared files are checked before
declared subdirectories; missing subdirectories are created when the node
allows repair, otherwise the walk fails. The first failure aborts the whole
walk and propagates unchanged to the caller.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Set, Union

from structure_manager.domain.errors import (
    MissingDirectoryError,
    MissingFileError,
    RepairFailedError,
    UnexpectedEntryError,
    VerificationError,
)
from structure_manager.domain.structure_models import StructureItem
from structure_manager.domain.verification_models import VerificationReport
from structure_manager.infra import fs

logger = logging.getLogger(__name__)


@dataclass
class _WalkState:
    """Mutable counters shared across one walk."""
    created_dirs: List[str] = field(default_factory=list)
    checked_files: int = 0
    checked_dirs: int = 0


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def verify(root_path: Union[str, "os.PathLike[str]"], item: StructureItem) -> VerificationReport:
    """
    Verify, and repair where allowed, the structure below root_path.

    The root itself is not required to exist up front: a node with no
    declarations passes, declared files fail on the first missing one, and
    repairable subdirectories are created together with any missing ancestor.
    Directories created before a later failure are left on disk.

    Args:
        root_path: Directory the item describes.
        item: Expected structure for that directory.

    Returns:
        VerificationReport: Counters and the directories created by repair.

    Raises:
        MissingFileError: A declared file does not exist.
        MissingDirectoryError: A declared directory is missing and not repairable.
        RepairFailedError: Creating a missing directory failed.
        UnexpectedEntryError: A strict node holds an undeclared entry.
    """
    root = os.path.abspath(os.fspath(root_path))
    state = _WalkState()

    logger.debug(f"Verifying structure below {root}")
    _dfs_verify(root, item, state)

    return VerificationReport(
        root=root,
        created_dirs=tuple(state.created_dirs),
        checked_files=state.checked_files,
        checked_dirs=state.checked_dirs,
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TRAVERSAL
# -----------------------------------------------------------------------------

def _dfs_verify(path: str, item: StructureItem, state: _WalkState) -> None:
    repair = item.repair

    for file_name in item.iter_files():
        file_path = os.path.join(path, file_name)
        if not fs.entry_exists(file_path):
            raise MissingFileError(file_path)
        state.checked_files += 1
        logger.debug(f"File present: {file_path}")

    for dir_name, child in item.iter_dirs():
        dir_path = os.path.join(path, dir_name)
        if not fs.entry_exists(dir_path):
            if not repair:
                raise MissingDirectoryError(dir_path)
            try:
                fs.make_dirs(dir_path)
            except (OSError, ValueError) as e:
                raise RepairFailedError(dir_path, e) from e
            state.created_dirs.append(dir_path)
            logger.info(f"Created missing directory: {dir_path}")

        state.checked_dirs += 1
        _dfs_verify(dir_path, child, state)

    if item.strict:
        _check_no_extra_entries(path, item)


def _check_no_extra_entries(path: str, item: StructureItem) -> None:
    """Fail on the first (sorted) entry below path that the item does not declare."""
    try:
        present = fs.list_entry_names(path)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise MissingDirectoryError(path) from e
    except OSError as e:
        raise VerificationError(path, f"Failed to list directory: {path}, error: {e}") from e

    declared = _declared_names(item)
    for name in present:
        if name not in declared:
            raise UnexpectedEntryError(os.path.join(path, name))


def _declared_names(item: StructureItem) -> Set[str]:
    """First path component of every file and directory declaration."""
    names: Set[str] = set()
    for name in item.iter_files():
        names.add(_top_component(name))
    for name, _ in item.iter_dirs():
        names.add(_top_component(name))
    return names


def _top_component(name: str) -> str:
    return os.path.normpath(name).split(os.sep)[0]
