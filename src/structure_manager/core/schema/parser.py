from __future__ import annotations

"""
Structure Schema Parser.

Acts as the gatekeeper between externally supplied structured data and the
immutable schema model. Validates the document shape, maps the camelCase
directory identifiers onto DirectoryKind members and builds the
StructureItem tree. Never touches the filesystem.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from structure_manager.domain.constants import (
    EXTERNAL_TO_INTERNAL,
    INTERNAL_TO_EXTERNAL,
    ITEM_KEYS,
    OPTION_KEYS,
    DirectoryKind,
)
from structure_manager.domain.errors import ConfigError
from structure_manager.domain.structure_models import (
    StructureConfig,
    StructureItem,
    StructureItemOptions,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_structure_config(
        document: Any,
        *,
        reject_unknown: bool = False,
) -> Tuple[StructureConfig, List[str]]:
    """
    Validate a structured schema document and build the StructureConfig.

    Top-level keys are the external directory identifiers ('appCache',
    'document', ...). A null value leaves the directory unconfigured.
    Unknown keys are ignored and reported as warnings unless
    ``reject_unknown`` is set, in which case they raise.

    Args:
        document: Parsed document, usually the result of json.load.
        reject_unknown: If True, raise ConfigError on unknown keys.

    Returns:
        Tuple[StructureConfig, List[str]]: The schema and a list of warnings.

    Raises:
        ConfigError: If the document does not match the expected shape.
    """
    warnings: List[str] = []

    if not isinstance(document, Mapping):
        raise ConfigError(
            f"Invalid structure document: expected object, received {type(document).__name__}."
        )

    roots: Dict[DirectoryKind, StructureItem] = {}
    for key, value in document.items():
        internal = EXTERNAL_TO_INTERNAL.get(key) if isinstance(key, str) else None
        if internal is None:
            _unknown_key(key, "document", warnings, reject_unknown, hint=_snake_case_hint(key))
            continue
        if value is None:
            continue
        roots[DirectoryKind(internal)] = _parse_item(value, key, warnings, reject_unknown)

    config = StructureConfig(roots=roots)
    logger.debug(
        f"Structure schema parsed: {len(roots)} root(s) configured "
        f"({', '.join(k.external for k in config.configured_kinds()) or 'none'})."
    )
    return config, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TREE CONSTRUCTION
# -----------------------------------------------------------------------------

def _parse_item(value: Any, where: str, warnings: List[str], reject_unknown: bool) -> StructureItem:
    """Recursively build one StructureItem located at ``where``."""
    if not isinstance(value, Mapping):
        raise ConfigError(f"Invalid item '{where}': expected object, received {type(value).__name__}.")

    for key in value:
        if key not in ITEM_KEYS:
            _unknown_key(key, where, warnings, reject_unknown)

    options = _parse_options(value.get("options"), f"{where}.options", warnings, reject_unknown)
    files = _parse_files(value.get("files"), f"{where}.files")

    dirs: Optional[Dict[str, StructureItem]] = None
    raw_dirs = value.get("dirs")
    if raw_dirs is not None:
        if not isinstance(raw_dirs, Mapping):
            raise ConfigError(
                f"Invalid field '{where}.dirs': expected object, received {type(raw_dirs).__name__}."
            )
        dirs = {}
        for name, child in raw_dirs.items():
            child_where = f"{where}.dirs.{name}"
            _check_entry_name(name, child_where)
            dirs[name] = _parse_item(child, child_where, warnings, reject_unknown)

    return StructureItem(options=options, files=files, dirs=dirs)


def _parse_options(
        value: Any,
        where: str,
        warnings: List[str],
        reject_unknown: bool,
) -> Optional[StructureItemOptions]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigError(f"Invalid field '{where}': expected object, received {type(value).__name__}.")

    for key in value:
        if key not in OPTION_KEYS:
            _unknown_key(key, where, warnings, reject_unknown)

    return StructureItemOptions(
        repair=_as_bool(value.get("repair"), f"{where}.repair"),
        strict=_as_bool(value.get("strict"), f"{where}.strict"),
    )


def _parse_files(value: Any, where: str) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ConfigError(f"Invalid field '{where}': expected list[str], received {type(value).__name__}.")

    out: List[str] = []
    for i, item in enumerate(value):
        _check_entry_name(item, f"{where}[{i}]")
        out.append(item)
    return tuple(out)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE CHECKS
# -----------------------------------------------------------------------------

def _as_bool(value: Any, field: str) -> bool:
    """Booleans only; absent means False. No coercion from strings or numbers."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ConfigError(f"Invalid field '{field}': expected bool, received {type(value).__name__}.")


def _check_entry_name(name: Any, field: str) -> None:
    if not isinstance(name, str):
        raise ConfigError(f"Invalid name at '{field}': expected str, received {type(name).__name__}.")
    if not name.strip():
        raise ConfigError(f"Invalid name at '{field}': entry names must not be empty.")
    if os.path.isabs(name):
        raise ConfigError(f"Invalid name at '{field}': absolute paths are not allowed ('{name}').")
    if "\x00" in name:
        raise ConfigError(f"Invalid name at '{field}': entry names must not contain NUL bytes.")
    if os.pardir in os.path.normpath(name).split(os.sep):
        raise ConfigError(f"Invalid name at '{field}': entries must stay inside their directory ('{name}').")


def _unknown_key(
        key: Any,
        where: str,
        warnings: List[str],
        reject_unknown: bool,
        hint: str = "",
) -> None:
    msg = f"Unknown key '{key}' in '{where}'.{hint}"
    if reject_unknown:
        raise ConfigError(msg)
    warnings.append(f"{msg} Key ignored.")
    logger.warning(msg)


def _snake_case_hint(key: Any) -> str:
    if isinstance(key, str) and key in INTERNAL_TO_EXTERNAL:
        return f" Did you mean '{INTERNAL_TO_EXTERNAL[key]}'?"
    return ""
