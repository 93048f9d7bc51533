from __future__ import annotations

"""
Verification Result Data Models.

Defines the value objects returned by the verifier and the manager, plus the
factory functions used to build per-root results for the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from structure_manager.domain.constants import DirectoryKind
from structure_manager.domain.errors import StructureManagerError

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class VerificationReport:
    """
    Outcome of a successful verification walk.

    Attributes:
        root: Absolute path the walk started from.
        created_dirs: Directories created by repair, in creation order.
        checked_files: Number of file declarations confirmed.
        checked_dirs: Number of directory declarations confirmed or created.
    """
    root: str
    created_dirs: Tuple[str, ...] = field(default_factory=tuple)
    checked_files: int = 0
    checked_dirs: int = 0

    @property
    def repaired(self) -> bool:
        return bool(self.created_dirs)


@dataclass(frozen=True)
class RootVerificationResult:
    """
    Outcome of verifying one well-known directory.

    Attributes:
        kind: The directory kind verified.
        ok: Flag indicating success or failure.
        path: Resolved root path, empty if resolution failed.
        error: Descriptive message in case of failure.
        error_type: Exception class name in case of failure.
        report: Walk details on success.
    """
    kind: DirectoryKind
    ok: bool
    path: str = ""
    error: str = ""
    error_type: str = ""
    report: Optional[VerificationReport] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "kind": self.kind.external,
            "ok": self.ok,
            "path": self.path,
        }
        if self.ok and self.report is not None:
            out["created_dirs"] = list(self.report.created_dirs)
            out["checked_files"] = self.report.checked_files
            out["checked_dirs"] = self.report.checked_dirs
        else:
            out["error"] = self.error
            out["error_type"] = self.error_type
        return out

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        kind: DirectoryKind,
        path: str,
        report: VerificationReport,
) -> RootVerificationResult:
    """Build a successful per-root result."""
    return RootVerificationResult(kind=kind, ok=True, path=path, report=report)


def create_error_result(
        kind: DirectoryKind,
        error: StructureManagerError,
        path: str = "",
) -> RootVerificationResult:
    """
    Build a failed per-root result from the raised error.

    Args:
        kind: The directory kind that failed.
        error: The failure raised by resolution, dispatch or verification.
        path: Resolved root path, if resolution got that far.
    """
    return RootVerificationResult(
        kind=kind,
        ok=False,
        path=path,
        error=str(error),
        error_type=type(error).__name__,
    )
