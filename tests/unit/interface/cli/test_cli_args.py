from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Flag defaults and repeatable options.
2. Directory kind parsing from both identifier spellings and CSV lists.
3. KIND=DIR path override mapping.
4. Log level selection.
"""

import os

import pytest

from structure_manager.domain.constants import DEFAULT_APP_IDENTIFIER, DirectoryKind
from structure_manager.interface.cli.args import (
    build_parser,
    log_level,
    parse_kinds,
    parse_path_overrides,
)


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_defaults():
    args = parse_args(["--schema", "structure.json"])

    assert args.schema_path == "structure.json"
    assert args.roots is None
    assert args.path_overrides is None
    assert args.app_identifier == DEFAULT_APP_IDENTIFIER
    assert args.keep_going is False
    assert args.reject_unknown is False
    assert args.json_output is False
    assert args.dump_config is False
    assert args.log_file is None


def test_cli_schema_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_cli_repeatable_options():
    args = parse_args([
        "-s", "structure.json",
        "-r", "appConfig",
        "--root", "document,audio",
        "-p", "appConfig=/tmp/cfg",
        "--keep-going",
        "--json",
    ])

    assert args.roots == ["appConfig", "document,audio"]
    assert args.path_overrides == ["appConfig=/tmp/cfg"]
    assert args.keep_going is True
    assert args.json_output is True


def test_parse_kinds_accepts_csv_and_both_spellings():
    kinds = parse_kinds(["appConfig", "document, app_local_data", ""])

    assert kinds == [DirectoryKind.APP_CONFIG, DirectoryKind.DOCUMENT, DirectoryKind.APP_LOCAL_DATA]


def test_parse_kinds_empty_means_all():
    assert parse_kinds(None) is None
    assert parse_kinds([]) is None


def test_parse_kinds_rejects_unknown_names():
    with pytest.raises(ValueError):
        parse_kinds(["appCash"])


def test_path_overrides_mapping(tmp_path):
    overrides = parse_path_overrides([f"appConfig={tmp_path}", "temp = relative/dir"])

    assert overrides[DirectoryKind.APP_CONFIG] == str(tmp_path)
    assert overrides[DirectoryKind.TEMP] == os.path.abspath("relative/dir")


def test_path_overrides_keep_equals_in_directory(tmp_path):
    overrides = parse_path_overrides([f"document={tmp_path}/a=b"])

    assert overrides[DirectoryKind.DOCUMENT].endswith("a=b")


@pytest.mark.parametrize("value", ["appConfig", "appConfig=", "appConfig=   ", "nope=/tmp"])
def test_path_overrides_reject_malformed_pairs(value):
    with pytest.raises(ValueError):
        parse_path_overrides([value])


def test_log_level_selection():
    assert log_level(parse_args(["-s", "x"])) == "WARNING"
    assert log_level(parse_args(["-s", "x", "-v"])) == "INFO"
    assert log_level(parse_args(["-s", "x", "-v", "--debug"])) == "DEBUG"
