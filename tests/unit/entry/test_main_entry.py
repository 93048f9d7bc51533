from __future__ import annotations

"""
Unit tests for the Main Entry Point.

Verifies that the installed console script targets the supervised entry
point, that the crash hook is installed, and the interrupt exit code.
"""

import importlib
import re
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]


@pytest.fixture
def entry_module():
    """Import main.py, restoring the interpreter's excepthook afterwards."""
    previous = sys.excepthook
    module = importlib.import_module("structure_manager.main")
    yield module
    sys.excepthook = previous


def test_console_script_targets_supervised_entry() -> None:
    setup_text = (PROJECT_ROOT / "setup.py").read_text(encoding="utf-8")

    targets = re.findall(r"structure-manager=([\w.]+:\w+)", setup_text)

    assert targets == ["structure_manager.main:main"]


def test_import_installs_exception_hook(entry_module) -> None:
    importlib.reload(entry_module)

    assert sys.excepthook is entry_module.global_exception_handler


def test_main_delegates_to_cli(entry_module) -> None:
    with patch("structure_manager.interface.cli.app.main", return_value=1) as cli_main:
        assert entry_module.main() == 1
    cli_main.assert_called_once_with()


def test_keyboard_interrupt_exits_130(entry_module, capsys: pytest.CaptureFixture[str]) -> None:
    with patch("structure_manager.interface.cli.app.main", side_effect=KeyboardInterrupt):
        assert entry_module.main() == 130
    assert "Interrupted." in capsys.readouterr().err


def test_supervisor_logs_and_prints_trace(entry_module, capsys: pytest.CaptureFixture[str]) -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        entry_module.global_exception_handler(type(e), e, e.__traceback__)

    err = capsys.readouterr().err
    assert "CRITICAL ERROR (STRUCTURE MANAGER)" in err
    assert "RuntimeError: boom" in err
