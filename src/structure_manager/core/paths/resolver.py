from __future__ import annotations

"""
Well-Known Directory Path Resolution.

Maps each DirectoryKind onto an absolute path for the current OS, user and
application. Follows the XDG base directory and user-dirs conventions on
Linux, the ~/Library layout on macOS and the known-folder environment
variables on Windows. Kinds with no counterpart on a platform raise
PathResolutionError instead of guessing.
"""

import logging
import ntpath
import os
import posixpath
import sys
import tempfile
from typing import Dict, Mapping, Optional, Protocol, Tuple, Union

from structure_manager.domain.constants import DEFAULT_APP_IDENTIFIER, DirectoryKind
from structure_manager.domain.errors import PathResolutionError

logger = logging.getLogger(__name__)

K = DirectoryKind

# -----------------------------------------------------------------------------
# PLATFORM TABLES
# -----------------------------------------------------------------------------

# Base kinds the application-scoped kinds are derived from
_APP_BASES: Dict[DirectoryKind, DirectoryKind] = {
    K.APP_CACHE: K.CACHE,
    K.APP_CONFIG: K.CONFIG,
    K.APP_DATA: K.DATA,
    K.APP_LOCAL_DATA: K.LOCAL_DATA,
}

# (environment variable, default relative to home)
_XDG_BASES: Dict[DirectoryKind, Tuple[str, str]] = {
    K.CACHE: ("XDG_CACHE_HOME", ".cache"),
    K.CONFIG: ("XDG_CONFIG_HOME", ".config"),
    K.DATA: ("XDG_DATA_HOME", ".local/share"),
    K.LOCAL_DATA: ("XDG_DATA_HOME", ".local/share"),
    K.EXECUTABLE: ("XDG_BIN_HOME", ".local/bin"),
}

_XDG_USER_DIRS: Dict[DirectoryKind, str] = {
    K.AUDIO: "XDG_MUSIC_DIR",
    K.DESKTOP: "XDG_DESKTOP_DIR",
    K.DOCUMENT: "XDG_DOCUMENTS_DIR",
    K.DOWNLOAD: "XDG_DOWNLOAD_DIR",
    K.PICTURE: "XDG_PICTURES_DIR",
    K.PUBLIC: "XDG_PUBLICSHARE_DIR",
    K.TEMPLATE: "XDG_TEMPLATES_DIR",
    K.VIDEO: "XDG_VIDEOS_DIR",
}

_MACOS_DIRS: Dict[DirectoryKind, str] = {
    K.CACHE: "Library/Caches",
    K.CONFIG: "Library/Application Support",
    K.DATA: "Library/Application Support",
    K.LOCAL_DATA: "Library/Application Support",
    K.FONT: "Library/Fonts",
    K.AUDIO: "Music",
    K.DESKTOP: "Desktop",
    K.DOCUMENT: "Documents",
    K.DOWNLOAD: "Downloads",
    K.PICTURE: "Pictures",
    K.PUBLIC: "Public",
    K.VIDEO: "Movies",
}

# (environment variable, optional suffix)
_WINDOWS_DIRS: Dict[DirectoryKind, Tuple[str, str]] = {
    K.CACHE: ("LOCALAPPDATA", ""),
    K.CONFIG: ("APPDATA", ""),
    K.DATA: ("APPDATA", ""),
    K.LOCAL_DATA: ("LOCALAPPDATA", ""),
    K.AUDIO: ("USERPROFILE", "Music"),
    K.DESKTOP: ("USERPROFILE", "Desktop"),
    K.DOCUMENT: ("USERPROFILE", "Documents"),
    K.DOWNLOAD: ("USERPROFILE", "Downloads"),
    K.PICTURE: ("USERPROFILE", "Pictures"),
    K.PUBLIC: ("PUBLIC", ""),
    K.TEMPLATE: ("APPDATA", "Microsoft\\Windows\\Templates"),
    K.VIDEO: ("USERPROFILE", "Videos"),
}


# -----------------------------------------------------------------------------
# RESOLVER CONTRACT
# -----------------------------------------------------------------------------

class PathResolver(Protocol):
    """Anything able to turn a DirectoryKind into an absolute path."""

    def resolve(self, kind: DirectoryKind) -> str:
        ...


class StaticPathResolver:
    """
    Resolver backed by an explicit mapping.

    Used for command-line path overrides and wherever the host already knows
    its directories.
    """

    def __init__(
            self,
            paths: Mapping[Union[DirectoryKind, str], str],
            fallback: Optional[PathResolver] = None,
    ) -> None:
        self._paths = {DirectoryKind.parse(k): os.path.abspath(v) for k, v in paths.items()}
        self._fallback = fallback

    def resolve(self, kind: DirectoryKind) -> str:
        kind = DirectoryKind.parse(kind)
        if kind in self._paths:
            return self._paths[kind]
        if self._fallback is not None:
            return self._fallback.resolve(kind)
        raise PathResolutionError(kind, "no path configured")


class SystemPathResolver:
    """
    Resolver following the conventions of the running (or given) platform.

    Args:
        app_identifier: Name appended to the base directories for app_* kinds.
        platform: sys.platform style name; defaults to the running platform.
        environ: Environment mapping; defaults to os.environ.
        home: Home directory override.
        resource_dir: Directory bundled resources live in; defaults to the
                      directory of the running program.
    """

    def __init__(
            self,
            app_identifier: str = DEFAULT_APP_IDENTIFIER,
            *,
            platform: Optional[str] = None,
            environ: Optional[Mapping[str, str]] = None,
            home: Optional[str] = None,
            resource_dir: Optional[str] = None,
    ) -> None:
        if not app_identifier or not app_identifier.strip():
            raise ValueError("app_identifier must not be empty")
        self.app_identifier = app_identifier.strip()
        self.platform = _normalize_platform(platform or sys.platform)
        self._environ = environ if environ is not None else os.environ
        self._use_process_home = environ is None
        self._home = home
        self._resource_dir = resource_dir
        self._path = ntpath if self.platform == "windows" else posixpath

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def resolve(self, kind: DirectoryKind) -> str:
        """
        Resolve the absolute path of a well-known directory.

        Raises:
            PathResolutionError: If the kind is unsupported or unresolvable here.
        """
        kind = DirectoryKind.parse(kind)
        path = self._resolve(kind)
        if not self._path.isabs(path):
            raise PathResolutionError(kind, f"resolved path is not absolute ({path!r})")
        path = self._path.normpath(path)
        logger.debug(f"Resolved {kind.external} -> {path}")
        return path

    def resolve_all(self) -> Dict[DirectoryKind, Union[str, PathResolutionError]]:
        """Resolve every kind, keeping failures in place of paths."""
        out: Dict[DirectoryKind, Union[str, PathResolutionError]] = {}
        for kind in DirectoryKind:
            try:
                out[kind] = self.resolve(kind)
            except PathResolutionError as e:
                out[kind] = e
        return out

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _resolve(self, kind: DirectoryKind) -> str:
        if kind is K.HOME:
            return self._home_dir(kind)
        if kind is K.TEMP:
            return self._environ_temp() or tempfile.gettempdir()
        if kind is K.RESOURCE:
            return self._resource_dir or os.path.dirname(os.path.abspath(sys.argv[0] or "."))
        if kind in _APP_BASES:
            return self._path.join(self._resolve(_APP_BASES[kind]), self.app_identifier)
        if kind is K.APP_LOG:
            if self.platform == "macos":
                return self._path.join(self._home_dir(kind), "Library", "Logs", self.app_identifier)
            return self._path.join(self._resolve(K.LOCAL_DATA), self.app_identifier, "logs")

        if self.platform == "linux":
            return self._linux(kind)
        if self.platform == "macos":
            return self._macos(kind)
        return self._windows(kind)

    def _linux(self, kind: DirectoryKind) -> str:
        if kind in _XDG_BASES:
            var, default = _XDG_BASES[kind]
            value = self._environ.get(var, "")
            # Relative XDG values are invalid and must be ignored
            if value and posixpath.isabs(value):
                return value
            return posixpath.join(self._home_dir(kind), default)
        if kind is K.FONT:
            return posixpath.join(self._linux(K.DATA), "fonts")
        if kind is K.RUNTIME:
            value = self._environ.get("XDG_RUNTIME_DIR", "")
            if value and posixpath.isabs(value):
                return value
            raise PathResolutionError(kind, "XDG_RUNTIME_DIR is not set")
        if kind in _XDG_USER_DIRS:
            return self._xdg_user_dir(kind, _XDG_USER_DIRS[kind])
        raise self._unsupported(kind)

    def _macos(self, kind: DirectoryKind) -> str:
        if kind in _MACOS_DIRS:
            return posixpath.join(self._home_dir(kind), *_MACOS_DIRS[kind].split("/"))
        raise self._unsupported(kind)

    def _windows(self, kind: DirectoryKind) -> str:
        if kind not in _WINDOWS_DIRS:
            raise self._unsupported(kind)
        var, suffix = _WINDOWS_DIRS[kind]
        base = self._environ.get(var, "")
        if not base and var == "USERPROFILE":
            base = self._home or ""
        if not base:
            raise PathResolutionError(kind, f"environment variable {var} is not set")
        return ntpath.join(base, suffix) if suffix else base

    def _xdg_user_dir(self, kind: DirectoryKind, var: str) -> str:
        home = self._home_dir(kind)
        value = self._environ.get(var) or _read_user_dirs(self._linux(K.CONFIG)).get(var, "")
        value = value.replace("$HOME", home)
        # A user dir pointing at the home directory itself means "disabled"
        if not value or not posixpath.isabs(value) or posixpath.normpath(value) == posixpath.normpath(home):
            raise PathResolutionError(kind, f"{var} is not configured")
        return value

    def _home_dir(self, kind: DirectoryKind) -> str:
        if self._home:
            return self._home
        var = "USERPROFILE" if self.platform == "windows" else "HOME"
        home = self._environ.get(var, "")
        if not home and self._use_process_home:
            home = os.path.expanduser("~")
        if not home or home == "~":
            raise PathResolutionError(kind, "home directory could not be determined")
        return home

    def _environ_temp(self) -> str:
        names = ("TEMP", "TMP") if self.platform == "windows" else ("TMPDIR",)
        for name in names:
            value = self._environ.get(name)
            if value:
                return value
        return ""

    def _unsupported(self, kind: DirectoryKind) -> PathResolutionError:
        return PathResolutionError(kind, f"not supported on {self.platform}")


# -----------------------------------------------------------------------------
# MODULE HELPERS
# -----------------------------------------------------------------------------

def _normalize_platform(name: str) -> str:
    n = name.lower()
    if n.startswith("win") or n == "nt":
        return "windows"
    if n in ("darwin", "macos", "mac"):
        return "macos"
    return "linux"


def _read_user_dirs(config_home: str) -> Dict[str, str]:
    """
    Parse the xdg-user-dirs file (``user-dirs.dirs``) below config_home.

    Returns an empty mapping when the file is absent or unreadable.
    """
    path = os.path.join(config_home, "user-dirs.dirs")
    entries: Dict[str, str] = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, _, value = line.partition("=")
                entries[key.strip()] = value.strip().strip('"')
    except OSError:
        return {}
    return entries
