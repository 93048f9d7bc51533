from __future__ import annotations

"""
Structure Schema Loader.

Reads a JSON schema document from disk or from a string and hands it to the
parser. All I/O and syntax failures surface as ConfigError.
"""

import json
import logging
import os
from typing import List, Tuple, Union

from structure_manager.core.schema.parser import parse_structure_config
from structure_manager.domain.errors import ConfigError
from structure_manager.domain.structure_models import StructureConfig
from structure_manager.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def load_structure_json(
        text: str,
        *,
        reject_unknown: bool = False,
) -> Tuple[StructureConfig, List[str]]:
    """
    Parse a JSON string into a StructureConfig.

    Args:
        text: JSON document.
        reject_unknown: Forwarded to the parser.

    Returns:
        Tuple[StructureConfig, List[str]]: The schema and parser warnings.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed structure document: {e}") from e
    return parse_structure_config(document, reject_unknown=reject_unknown)


def load_structure_file(
        path: Union[str, "os.PathLike[str]"],
        *,
        reject_unknown: bool = False,
) -> Tuple[StructureConfig, List[str]]:
    """
    Read and parse a JSON schema file.

    Args:
        path: Location of the schema file.
        reject_unknown: Forwarded to the parser.

    Returns:
        Tuple[StructureConfig, List[str]]: The schema and parser warnings.
    """
    file_path = normalize_path(path)
    if not os.path.isfile(file_path):
        raise ConfigError(f"Structure schema file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read structure schema {file_path}: {e}") from e

    logger.debug(f"Loaded structure schema from {file_path}")
    try:
        return load_structure_json(text, reject_unknown=reject_unknown)
    except ConfigError as e:
        raise ConfigError(f"{file_path}: {e}") from e
