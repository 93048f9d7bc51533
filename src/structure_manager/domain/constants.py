from __future__ import annotations

"""
Domain Constants and Directory Identifiers.

Provides the closed set of well-known directory kinds a structure schema can
describe, together with the fixed mapping between the external (camelCase)
identifiers used in schema documents and the internal (snake_case) names.
"""

from enum import Enum
from typing import Dict, Union

APP_NAME = "structure-manager"
DEFAULT_APP_IDENTIFIER = "structure-manager"

# Keys allowed inside a structure item and inside its options block
ITEM_KEYS = ("options", "files", "dirs")
OPTION_KEYS = ("repair", "strict")


# -----------------------------------------------------------------------------
# WELL-KNOWN DIRECTORY KINDS
# -----------------------------------------------------------------------------

class DirectoryKind(Enum):
    """
    Well-known OS directories that can carry an expected structure.

    The member value is the internal identifier; ``external`` returns the
    spelling used by schema documents.
    """
    APP_CACHE = "app_cache"
    APP_CONFIG = "app_config"
    APP_DATA = "app_data"
    APP_LOCAL_DATA = "app_local_data"
    APP_LOG = "app_log"
    AUDIO = "audio"
    CACHE = "cache"
    CONFIG = "config"
    DATA = "data"
    DESKTOP = "desktop"
    DOCUMENT = "document"
    DOWNLOAD = "download"
    EXECUTABLE = "executable"
    FONT = "font"
    HOME = "home"
    LOCAL_DATA = "local_data"
    PICTURE = "picture"
    PUBLIC = "public"
    RESOURCE = "resource"
    RUNTIME = "runtime"
    TEMP = "temp"
    TEMPLATE = "template"
    VIDEO = "video"

    @property
    def internal(self) -> str:
        return self.value

    @property
    def external(self) -> str:
        return INTERNAL_TO_EXTERNAL[self.value]

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'app local data'."""
        return self.value.replace("_", " ")

    @classmethod
    def parse(cls, value: Union["DirectoryKind", str]) -> "DirectoryKind":
        """
        Resolve a directory kind from a member or either identifier spelling.

        Args:
            value: A DirectoryKind, an internal ('app_cache') or an external
                   ('appCache') identifier.

        Returns:
            DirectoryKind: The matching member.

        Raises:
            ValueError: If the value names no known directory.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            if key in EXTERNAL_TO_INTERNAL:
                return cls(EXTERNAL_TO_INTERNAL[key])
            if key in INTERNAL_TO_EXTERNAL:
                return cls(key)
        raise ValueError(f"Unknown directory kind: {value!r}")


# -----------------------------------------------------------------------------
# IDENTIFIER TABLES
# -----------------------------------------------------------------------------

INTERNAL_TO_EXTERNAL: Dict[str, str] = {
    "app_cache": "appCache",
    "app_config": "appConfig",
    "app_data": "appData",
    "app_local_data": "appLocalData",
    "app_log": "appLog",
    "audio": "audio",
    "cache": "cache",
    "config": "config",
    "data": "data",
    "desktop": "desktop",
    "document": "document",
    "download": "download",
    "executable": "executable",
    "font": "font",
    "home": "home",
    "local_data": "localData",
    "picture": "picture",
    "public": "public",
    "resource": "resource",
    "runtime": "runtime",
    "temp": "temp",
    "template": "template",
    "video": "video",
}

EXTERNAL_TO_INTERNAL: Dict[str, str] = {v: k for k, v in INTERNAL_TO_EXTERNAL.items()}
