from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the structure-manager tool and the helpers
that translate raw argparse values into domain objects.
"""

import argparse
from typing import Dict, List, Optional

from structure_manager.domain.constants import APP_NAME, DEFAULT_APP_IDENTIFIER, DirectoryKind
from structure_manager.infra.fs import normalize_path

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the structure-manager CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Verify and repair the expected layout of well-known application directories.",
    )

    # --- Schema ---
    p.add_argument(
        "-s", "--schema",
        dest="schema_path",
        required=True,
        help="JSON structure schema describing the expected directories.",
    )
    p.add_argument(
        "--reject-unknown",
        action="store_true",
        help="Fail on unknown keys in the schema instead of ignoring them.",
    )

    # --- Root Selection ---
    p.add_argument(
        "-r", "--root",
        dest="roots",
        action="append",
        default=None,
        metavar="KIND",
        help="Directory to verify (e.g. appConfig, document). Repeatable. "
             "Defaults to every configured directory.",
    )
    p.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the remaining directories after a failure.",
    )

    # --- Path Resolution ---
    p.add_argument(
        "-i", "--identifier",
        dest="app_identifier",
        default=DEFAULT_APP_IDENTIFIER,
        help="Application identifier appended to the app* directories.",
    )
    p.add_argument(
        "-p", "--path",
        dest="path_overrides",
        action="append",
        default=None,
        metavar="KIND=DIR",
        help="Use DIR as the path of KIND instead of the platform default. Repeatable.",
    )

    # --- Output & Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the parsed schema as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress at INFO level.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def parse_kinds(values: Optional[List[str]]) -> Optional[List[DirectoryKind]]:
    """
    Convert --root values into directory kinds, accepting CSV lists too.

    Raises:
        ValueError: If a value names no known directory.
    """
    if not values:
        return None
    kinds: List[DirectoryKind] = []
    for value in values:
        for part in _split_csv(value):
            kinds.append(DirectoryKind.parse(part))
    return kinds


def parse_path_overrides(values: Optional[List[str]]) -> Dict[DirectoryKind, str]:
    """
    Convert KIND=DIR pairs into a resolver mapping.

    DIR may use ~ and environment variables.

    Raises:
        ValueError: If a pair is malformed or names an unknown directory.
    """
    overrides: Dict[DirectoryKind, str] = {}
    for value in values or []:
        kind_name, sep, path = value.partition("=")
        if not sep or not path.strip():
            raise ValueError(f"Invalid path override {value!r}: expected KIND=DIR")
        overrides[DirectoryKind.parse(kind_name)] = normalize_path(path)
    return overrides


def log_level(args: argparse.Namespace) -> str:
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    return "WARNING"

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: str) -> List[str]:
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
