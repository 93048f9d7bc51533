from __future__ import annotations

"""
Structure Manager Service.

Owns the application-wide StructureConfig and dispatches verification of
each well-known directory: resolve the root path, look up its schema entry
and hand both to the verifier. The configuration lives in a single
lock-guarded cell; every call reads one immutable snapshot, and
update_config() is the only way to swap it at runtime.
"""

import logging
import os
import threading
from typing import Any, Iterable, List, Optional, Sequence, Union

from structure_manager.core.schema.loader import load_structure_file
from structure_manager.core.schema.parser import parse_structure_config
from structure_manager.core.paths.resolver import PathResolver, SystemPathResolver
from structure_manager.core.verification.verifier import verify
from structure_manager.domain.constants import DirectoryKind
from structure_manager.domain.errors import (
    FieldNotConfiguredError,
    PathResolutionError,
    StructureManagerError,
)
from structure_manager.domain.structure_models import StructureConfig
from structure_manager.domain.verification_models import (
    RootVerificationResult,
    VerificationReport,
    create_error_result,
    create_success_result,
)

logger = logging.getLogger(__name__)

KindLike = Union[DirectoryKind, str]


class StructureManager:
    """
    Verifies well-known application directories against a structure schema.

    Args:
        config: The parsed schema.
        resolver: Path resolution service; defaults to SystemPathResolver().
    """

    def __init__(self, config: StructureConfig, resolver: Optional[PathResolver] = None) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._resolver: PathResolver = resolver if resolver is not None else SystemPathResolver()

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def from_document(
            cls,
            document: Any,
            resolver: Optional[PathResolver] = None,
            *,
            reject_unknown: bool = False,
    ) -> "StructureManager":
        """Build a manager from an already-parsed schema document."""
        config, _ = parse_structure_config(document, reject_unknown=reject_unknown)
        return cls(config, resolver)

    @classmethod
    def from_file(
            cls,
            path: Union[str, "os.PathLike[str]"],
            resolver: Optional[PathResolver] = None,
            *,
            reject_unknown: bool = False,
    ) -> "StructureManager":
        """Build a manager from a JSON schema file."""
        config, _ = load_structure_file(path, reject_unknown=reject_unknown)
        return cls(config, resolver)

    # -------------------------------------------------------------------------
    # Configuration cell
    # -------------------------------------------------------------------------

    @property
    def config(self) -> StructureConfig:
        with self._lock:
            return self._config

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def update_config(self, config: StructureConfig) -> StructureConfig:
        """
        Atomically replace the schema used by subsequent verifications.

        Verifications already running keep the snapshot they started with.

        Returns:
            StructureConfig: The replaced configuration.
        """
        if not isinstance(config, StructureConfig):
            raise TypeError(f"expected StructureConfig, received {type(config).__name__}")
        with self._lock:
            previous, self._config = self._config, config
        logger.info(f"Structure configuration updated ({len(config.configured_kinds())} root(s)).")
        return previous

    # -------------------------------------------------------------------------
    # Verification API
    # -------------------------------------------------------------------------

    def resolve(self, kind: KindLike) -> str:
        """
        Resolve the root path of a well-known directory.

        Raises:
            PathResolutionError: If the resolver cannot provide a path.
        """
        kind = DirectoryKind.parse(kind)
        try:
            return self._resolver.resolve(kind)
        except PathResolutionError:
            raise
        except (OSError, ValueError) as e:
            raise PathResolutionError(kind, str(e)) from e

    def verify(self, kind: KindLike) -> VerificationReport:
        """
        Verify one well-known directory against its schema entry.

        Args:
            kind: DirectoryKind or its internal/external identifier.

        Raises:
            PathResolutionError: The directory cannot be resolved here.
            FieldNotConfiguredError: The schema has no entry for the directory.
            VerificationError: The walk failed (see verifier.verify).
        """
        kind = DirectoryKind.parse(kind)
        return self._verify_at(kind, self.resolve(kind))

    def _verify_at(self, kind: DirectoryKind, path: str) -> VerificationReport:
        item = self.config.get(kind)
        if item is None:
            raise FieldNotConfiguredError(kind)

        report = verify(path, item)
        logger.info(
            f"Verified {kind.external} at {path} "
            f"({report.checked_files} file(s), {report.checked_dirs} dir(s), "
            f"{len(report.created_dirs)} created)"
        )
        return report

    def verify_all(
            self,
            kinds: Optional[Iterable[KindLike]] = None,
            *,
            fail_fast: bool = True,
    ) -> List[RootVerificationResult]:
        """
        Verify several roots in DirectoryKind order.

        Args:
            kinds: Roots to verify; defaults to every configured root.
            fail_fast: Re-raise the first failure instead of recording it.

        Returns:
            List[RootVerificationResult]: One result per verified root.
        """
        targets = self._ordered_kinds(kinds)
        results: List[RootVerificationResult] = []

        for kind in targets:
            path = ""
            try:
                path = self.resolve(kind)
                report = self._verify_at(kind, path)
            except StructureManagerError as e:
                if fail_fast:
                    logger.error(f"Verification of {kind.external} failed: {e}")
                    raise
                logger.warning(f"Verification of {kind.external} failed: {e}")
                results.append(create_error_result(kind, e, path))
                continue
            results.append(create_success_result(kind, path, report))

        return results

    def _ordered_kinds(self, kinds: Optional[Iterable[KindLike]]) -> List[DirectoryKind]:
        if kinds is None:
            return self.config.configured_kinds()
        wanted = {DirectoryKind.parse(k) for k in kinds}
        return [kind for kind in DirectoryKind if kind in wanted]


# -----------------------------------------------------------------------------
# STARTUP HOOK
# -----------------------------------------------------------------------------

def bootstrap(
        schema_path: Union[str, "os.PathLike[str]"],
        resolver: Optional[PathResolver] = None,
        *,
        verify_kinds: Sequence[KindLike] = (),
        reject_unknown: bool = False,
) -> StructureManager:
    """
    Application startup entry: load the schema once and verify the given roots.

    Any failure propagates, so the host can refuse to start.

    Args:
        schema_path: JSON schema file.
        resolver: Path resolution service.
        verify_kinds: Roots to verify immediately, in any order.
        reject_unknown: Forwarded to the parser.

    Returns:
        StructureManager: The ready manager, to be kept by the host.
    """
    manager = StructureManager.from_file(schema_path, resolver, reject_unknown=reject_unknown)
    if verify_kinds:
        manager.verify_all(verify_kinds, fail_fast=True)
    return manager
