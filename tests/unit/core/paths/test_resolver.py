from __future__ import annotations

"""
Unit tests for Well-Known Directory Path Resolution.

Platforms are simulated through the resolver's injection points (platform
name, environment mapping and home directory), so every table can be checked
from any host OS.
"""

from pathlib import Path

import pytest

from structure_manager.core.paths.resolver import StaticPathResolver, SystemPathResolver
from structure_manager.domain.constants import DirectoryKind as K
from structure_manager.domain.errors import PathResolutionError

HOME = "/home/tester"
APP_ID = "com.example.app"


def linux(environ=None, **kwargs) -> SystemPathResolver:
    return SystemPathResolver(APP_ID, platform="linux", environ=environ or {}, home=HOME, **kwargs)


# -----------------------------------------------------------------------------
# LINUX
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "kind, expected",
    [
        (K.CACHE, "/home/tester/.cache"),
        (K.CONFIG, "/home/tester/.config"),
        (K.DATA, "/home/tester/.local/share"),
        (K.LOCAL_DATA, "/home/tester/.local/share"),
        (K.EXECUTABLE, "/home/tester/.local/bin"),
        (K.FONT, "/home/tester/.local/share/fonts"),
        (K.HOME, "/home/tester"),
        (K.APP_CACHE, "/home/tester/.cache/com.example.app"),
        (K.APP_CONFIG, "/home/tester/.config/com.example.app"),
        (K.APP_DATA, "/home/tester/.local/share/com.example.app"),
        (K.APP_LOCAL_DATA, "/home/tester/.local/share/com.example.app"),
        (K.APP_LOG, "/home/tester/.local/share/com.example.app/logs"),
    ],
)
def test_linux_defaults(kind: K, expected: str) -> None:
    assert linux().resolve(kind) == expected


def test_linux_xdg_overrides() -> None:
    resolver = linux({"XDG_CONFIG_HOME": "/etc/xdg-user", "XDG_CACHE_HOME": "relative/cache"})

    assert resolver.resolve(K.APP_CONFIG) == "/etc/xdg-user/com.example.app"
    # Relative XDG values are ignored
    assert resolver.resolve(K.CACHE) == "/home/tester/.cache"


def test_linux_runtime_requires_environment() -> None:
    with pytest.raises(PathResolutionError) as exc:
        linux().resolve(K.RUNTIME)
    assert "XDG_RUNTIME_DIR" in str(exc.value)

    assert linux({"XDG_RUNTIME_DIR": "/run/user/1000"}).resolve(K.RUNTIME) == "/run/user/1000"


def test_linux_user_dirs_from_file(tmp_path: Path) -> None:
    config_home = tmp_path / "config"
    config_home.mkdir()
    (config_home / "user-dirs.dirs").write_text(
        "# written by xdg-user-dirs-update\n"
        'XDG_DOCUMENTS_DIR="$HOME/Docs"\n'
        'XDG_MUSIC_DIR="$HOME/"\n',
        encoding="utf-8",
    )
    resolver = linux({"XDG_CONFIG_HOME": str(config_home)})

    assert resolver.resolve(K.DOCUMENT) == "/home/tester/Docs"
    # Pointing at home means the directory is disabled
    with pytest.raises(PathResolutionError):
        resolver.resolve(K.AUDIO)
    with pytest.raises(PathResolutionError):
        resolver.resolve(K.VIDEO)


def test_linux_user_dir_environment_wins(tmp_path: Path) -> None:
    resolver = linux({"XDG_CONFIG_HOME": str(tmp_path), "XDG_DOWNLOAD_DIR": "/data/downloads"})

    assert resolver.resolve(K.DOWNLOAD) == "/data/downloads"


# -----------------------------------------------------------------------------
# MACOS
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "kind, expected",
    [
        (K.CACHE, "/Users/tester/Library/Caches"),
        (K.APP_CONFIG, "/Users/tester/Library/Application Support/com.example.app"),
        (K.APP_LOG, "/Users/tester/Library/Logs/com.example.app"),
        (K.FONT, "/Users/tester/Library/Fonts"),
        (K.VIDEO, "/Users/tester/Movies"),
        (K.DOCUMENT, "/Users/tester/Documents"),
    ],
)
def test_macos_table(kind: K, expected: str) -> None:
    resolver = SystemPathResolver(APP_ID, platform="darwin", environ={}, home="/Users/tester")

    assert resolver.resolve(kind) == expected


@pytest.mark.parametrize("kind", [K.RUNTIME, K.TEMPLATE, K.EXECUTABLE])
def test_macos_unsupported(kind: K) -> None:
    resolver = SystemPathResolver(APP_ID, platform="darwin", environ={}, home="/Users/tester")

    with pytest.raises(PathResolutionError) as exc:
        resolver.resolve(kind)
    assert exc.value.kind is kind


# -----------------------------------------------------------------------------
# WINDOWS
# -----------------------------------------------------------------------------

WIN_ENV = {
    "APPDATA": "C:\\Users\\tester\\AppData\\Roaming",
    "LOCALAPPDATA": "C:\\Users\\tester\\AppData\\Local",
    "USERPROFILE": "C:\\Users\\tester",
    "PUBLIC": "C:\\Users\\Public",
    "TEMP": "C:\\Users\\tester\\AppData\\Local\\Temp",
}


@pytest.mark.parametrize(
    "kind, expected",
    [
        (K.APP_DATA, "C:\\Users\\tester\\AppData\\Roaming\\com.example.app"),
        (K.APP_CACHE, "C:\\Users\\tester\\AppData\\Local\\com.example.app"),
        (K.APP_LOG, "C:\\Users\\tester\\AppData\\Local\\com.example.app\\logs"),
        (K.DOCUMENT, "C:\\Users\\tester\\Documents"),
        (K.PUBLIC, "C:\\Users\\Public"),
        (K.TEMPLATE, "C:\\Users\\tester\\AppData\\Roaming\\Microsoft\\Windows\\Templates"),
        (K.TEMP, "C:\\Users\\tester\\AppData\\Local\\Temp"),
        (K.HOME, "C:\\Users\\tester"),
    ],
)
def test_windows_table(kind: K, expected: str) -> None:
    resolver = SystemPathResolver(APP_ID, platform="win32", environ=WIN_ENV)

    assert resolver.resolve(kind) == expected


def test_windows_missing_environment_variable() -> None:
    resolver = SystemPathResolver(APP_ID, platform="win32", environ={"USERPROFILE": "C:\\Users\\tester"})

    with pytest.raises(PathResolutionError) as exc:
        resolver.resolve(K.APP_CONFIG)
    assert "APPDATA" in str(exc.value)


@pytest.mark.parametrize("kind", [K.FONT, K.RUNTIME, K.EXECUTABLE])
def test_windows_unsupported(kind: K) -> None:
    resolver = SystemPathResolver(APP_ID, platform="win32", environ=WIN_ENV)

    with pytest.raises(PathResolutionError):
        resolver.resolve(kind)


# -----------------------------------------------------------------------------
# COMMON BEHAVIOUR
# -----------------------------------------------------------------------------

def test_identifier_strings_are_accepted() -> None:
    assert linux().resolve("appCache") == linux().resolve(K.APP_CACHE)


def test_resource_dir_override() -> None:
    assert linux(resource_dir="/opt/app/resources").resolve(K.RESOURCE) == "/opt/app/resources"


def test_temp_uses_tmpdir() -> None:
    assert linux({"TMPDIR": "/var/tmp"}).resolve(K.TEMP) == "/var/tmp"


def test_resolve_all_keeps_failures() -> None:
    results = linux().resolve_all()

    assert len(results) == 23
    assert isinstance(results[K.RUNTIME], PathResolutionError)
    assert results[K.HOME] == HOME


def test_injected_environment_without_home_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", "/home/process-user")
    resolver = SystemPathResolver(APP_ID, platform="linux", environ={})

    with pytest.raises(PathResolutionError) as exc:
        resolver.resolve(K.HOME)
    assert "home directory" in str(exc.value)


def test_home_comes_from_injected_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", "/home/process-user")
    resolver = SystemPathResolver(APP_ID, platform="linux", environ={"HOME": "/home/injected"})

    assert resolver.resolve(K.CONFIG) == "/home/injected/.config"


def test_empty_identifier_is_rejected() -> None:
    with pytest.raises(ValueError):
        SystemPathResolver("  ")


def test_static_resolver(tmp_path: Path) -> None:
    resolver = StaticPathResolver({"document": str(tmp_path)}, fallback=linux())

    assert resolver.resolve(K.DOCUMENT) == str(tmp_path)
    assert resolver.resolve(K.CONFIG) == "/home/tester/.config"

    with pytest.raises(PathResolutionError) as exc:
        StaticPathResolver({}).resolve(K.VIDEO)
    assert "no path configured" in str(exc.value)
