from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, schema loading, path
resolver assembly, verification of the selected directories and result
rendering. Exit codes: 0 success, 1 verification failure, 2 configuration
or usage error.
"""

import json
import sys
from typing import List, Optional

from structure_manager.core.paths.resolver import StaticPathResolver, SystemPathResolver
from structure_manager.core.schema.loader import load_structure_file
from structure_manager.core.services.manager import StructureManager
from structure_manager.domain.constants import DirectoryKind
from structure_manager.domain.errors import ConfigError
from structure_manager.domain.verification_models import RootVerificationResult
from structure_manager.infra.logging import LoggingConfig, configure_logging, get_logger
from structure_manager.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    configure_logging(LoggingConfig(
        level=cli_args.log_level(args),
        console=True,
        log_file=args.log_file,
    ))

    # 2. Schema loading
    try:
        config, warnings = load_structure_file(args.schema_path, reject_unknown=args.reject_unknown)
    except ConfigError as e:
        logger.error(f"Invalid structure schema: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG

    for w in warnings:
        logger.warning(f"Schema: {w}")

    if args.dump_config:
        print(json.dumps(config.to_document(), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 3. Target selection and path resolution
    try:
        kinds = cli_args.parse_kinds(args.roots)
        overrides = cli_args.parse_path_overrides(args.path_overrides)
        system_resolver = SystemPathResolver(args.app_identifier)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG

    manager = StructureManager(config, StaticPathResolver(overrides, fallback=system_resolver))

    targets = kinds if kinds is not None else config.configured_kinds()
    if not targets:
        logger.warning("No directories are configured in the schema; nothing to verify.")

    # 4. Verification
    results = _run(manager, targets, keep_going=args.keep_going)

    # 5. Rendering
    if args.json_output:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    else:
        _print_human_summary(results)

    return EXIT_OK if all(r.ok for r in results) else EXIT_FAILED


def _run(manager: StructureManager, targets: List[DirectoryKind], *, keep_going: bool) -> List[RootVerificationResult]:
    """Verify targets in order, stopping at the first failure unless keep_going."""
    if keep_going:
        return manager.verify_all(targets, fail_fast=False)

    results: List[RootVerificationResult] = []
    for kind in _ordered(targets):
        results.extend(manager.verify_all([kind], fail_fast=False))
        if not results[-1].ok:
            break
    return results


def _ordered(kinds: List[DirectoryKind]) -> List[DirectoryKind]:
    wanted = set(kinds)
    return [kind for kind in DirectoryKind if kind in wanted]

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(results: List[RootVerificationResult]) -> None:
    """Print one line per verified directory, errors to stderr."""
    for r in results:
        if r.ok and r.report is not None:
            line = f"OK    {r.kind.external}: {r.path}"
            if r.report.created_dirs:
                line += f" (created {len(r.report.created_dirs)} director{'y' if len(r.report.created_dirs) == 1 else 'ies'})"
            print(line)
            for created in r.report.created_dirs:
                print(f"  + {created}")
        else:
            print(f"FAIL  {r.kind.external}: {r.error}", file=sys.stderr)

    failed = sum(1 for r in results if not r.ok)
    print(f"{len(results) - failed} passed, {failed} failed")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
