from __future__ import annotations

"""
Structure Manager Error Taxonomy.

Every failure raised by the schema parser, the path resolver, the manager
dispatch and the verifier derives from StructureManagerError so that callers
can trap the whole family with a single clause.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from structure_manager.domain.constants import DirectoryKind


class StructureManagerError(Exception):
    """Base class for all structure manager failures."""


# -----------------------------------------------------------------------------
# CONFIGURATION ERRORS
# -----------------------------------------------------------------------------

class ConfigError(StructureManagerError):
    """The schema document is malformed, of the wrong shape or unreadable."""


class FieldNotConfiguredError(StructureManagerError):
    """
    Verification was requested for a root the schema does not describe.

    Attributes:
        kind: The directory kind that has no schema entry.
    """

    def __init__(self, kind: "DirectoryKind") -> None:
        self.kind = kind
        super().__init__(f"Structure configuration field `{kind.external}` not found")


# -----------------------------------------------------------------------------
# PATH RESOLUTION ERRORS
# -----------------------------------------------------------------------------

class PathResolutionError(StructureManagerError):
    """
    A well-known directory could not be resolved on this platform.

    Attributes:
        kind: The directory kind being resolved.
        cause: Underlying reason, as text.
    """

    def __init__(self, kind: "DirectoryKind", cause: str) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"Failed to resolve {kind.label} path: {cause}")


# -----------------------------------------------------------------------------
# VERIFICATION ERRORS
# -----------------------------------------------------------------------------

class VerificationError(StructureManagerError):
    """
    An expected filesystem entry is absent or could not be repaired.

    Attributes:
        path: Absolute path that failed the check.
    """

    reason = "Verification failed"

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message or f"{self.reason}: {path}")


class MissingFileError(VerificationError):
    reason = "File not found"


class MissingDirectoryError(VerificationError):
    reason = "Directory not found"


class UnexpectedEntryError(VerificationError):
    """An undeclared entry exists below a node marked as strict."""
    reason = "Unexpected entry in strict directory"


class RepairFailedError(VerificationError):
    """
    Creating a missing directory failed.

    Attributes:
        cause: The error raised by the creation attempt.
    """
    reason = "Failed to create directory"

    def __init__(self, path: str, cause: Exception) -> None:
        self.cause = cause
        super().__init__(path, f"{self.reason}: {path}, error: {cause}")
