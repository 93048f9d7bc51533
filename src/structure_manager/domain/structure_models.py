from __future__ import annotations

"""
Expected Structure Data Models.

Provides the immutable tree describing what should exist below each
well-known directory: per-node options, required file names and nested
subdirectory items.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from structure_manager.domain.constants import DirectoryKind

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StructureItemOptions:
    """
    Per-node verification policy.

    Attributes:
        repair: Create declared subdirectories that are missing instead of failing.
        strict: Require the directory to hold no entries beyond the declared ones.
    """
    repair: bool = False
    strict: bool = False


@dataclass(frozen=True)
class StructureItem:
    """
    A directory node in the expected structure.

    Attributes:
        options: Node policy, None when the schema omits it.
        files: Required file names, in declaration order.
        dirs: Subdirectory name to nested item, in declaration order.
    """
    options: Optional[StructureItemOptions] = None
    files: Optional[Tuple[str, ...]] = None
    dirs: Optional[Mapping[str, "StructureItem"]] = None

    def __post_init__(self) -> None:
        # Freeze containers handed in by callers
        if self.files is not None and not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))
        if self.dirs is not None and not isinstance(self.dirs, MappingProxyType):
            object.__setattr__(self, "dirs", MappingProxyType(dict(self.dirs)))

    @property
    def repair(self) -> bool:
        return bool(self.options and self.options.repair)

    @property
    def strict(self) -> bool:
        return bool(self.options and self.options.strict)

    @property
    def is_empty(self) -> bool:
        """True when the node declares neither files nor subdirectories."""
        return not self.files and not self.dirs

    def iter_files(self) -> Iterator[str]:
        return iter(self.files or ())

    def iter_dirs(self) -> Iterator[Tuple[str, "StructureItem"]]:
        return iter((self.dirs or {}).items())

    def to_document(self) -> Dict[str, Any]:
        """Render the node back into its external schema shape."""
        doc: Dict[str, Any] = {}
        if self.options is not None:
            doc["options"] = {
                "repair": self.options.repair,
                "strict": self.options.strict,
            }
        if self.files is not None:
            doc["files"] = list(self.files)
        if self.dirs is not None:
            doc["dirs"] = {name: item.to_document() for name, item in self.dirs.items()}
        return doc


@dataclass(frozen=True)
class StructureConfig:
    """
    Root schema: the expected structure for each configured well-known directory.

    Kinds absent from ``roots`` are unconfigured; verifying them is a
    configuration error rather than a silent pass.
    """
    roots: Mapping[DirectoryKind, StructureItem] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.roots, MappingProxyType):
            object.__setattr__(self, "roots", MappingProxyType(dict(self.roots)))

    def get(self, kind: DirectoryKind) -> Optional[StructureItem]:
        return self.roots.get(kind)

    def is_configured(self, kind: DirectoryKind) -> bool:
        return kind in self.roots

    def configured_kinds(self) -> List[DirectoryKind]:
        """Configured kinds in DirectoryKind declaration order."""
        return [kind for kind in DirectoryKind if kind in self.roots]

    def to_document(self) -> Dict[str, Any]:
        return {kind.external: self.roots[kind].to_document() for kind in self.configured_kinds()}
