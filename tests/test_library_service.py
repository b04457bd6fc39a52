import json
import os

import pytest

import game_launcher
import main
import settings_manager
from game_catalog import ScanSession, CatalogEntry
from emulator_utils.emulator_manager import EmulatorKind
from library_service import LibraryService, BUSY_MESSAGE


class FakePopen:
    calls = []

    def __init__(self, args):
        FakePopen.calls.append(args)


@pytest.fixture
def service(tmp_path):
    return LibraryService(session=ScanSession(home_dir=str(tmp_path)), lock_timeout=0.05)


@pytest.fixture
def rom(tmp_path):
    path = tmp_path / "Games" / "Switch" / "Game.nsp"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"rom")
    return str(path)


def test_add_manual_entry_missing_path(service, tmp_path):
    success, message = service.add_manual_entry("Ghost", str(tmp_path / "ghost.nsp"), "yuzu")
    assert success is False
    assert "does not exist" in message
    assert service.get_catalog() == (True, [])


def test_add_manual_entry(service, rom):
    success, entry = service.add_manual_entry("Game", rom, "ryujinx")
    assert success is True
    assert entry.path == rom
    assert service.get_catalog() == (True, [entry])


def test_scan_and_scan_all(service, rom):
    success, games = service.scan("yuzu")
    assert success is True
    assert [g.path for g in games] == [rom]

    success, games = service.scan_all()
    assert success is True
    assert len(games) == 1


def test_scan_unknown_emulator(service):
    success, message = service.scan("dolphin")
    assert success is False
    assert "Unknown emulator" in message


def test_busy_session_reports_error(service, rom):
    service.scan("yuzu")
    service._lock.acquire()
    try:
        assert service.scan("yuzu") == (False, BUSY_MESSAGE)
        assert service.scan_directory(os.path.dirname(rom), "yuzu") == (False, BUSY_MESSAGE)
        assert service.get_catalog() == (False, BUSY_MESSAGE)
        assert service.catalog_as_json() == (False, BUSY_MESSAGE)
    finally:
        service._lock.release()

    success, text = service.catalog_as_json()
    assert success is True
    assert [g["path"] for g in json.loads(text)] == [rom]


def test_scan_directory(service, tmp_path):
    folder = tmp_path / "Picked"
    (folder / "nested").mkdir(parents=True)
    (folder / "nested" / "Kirby.xci").write_bytes(b"rom")

    success, games = service.scan_directory(str(folder), "ryujinx")
    assert success is True
    assert [(g.title, g.emulator) for g in games] == [("Kirby", EmulatorKind.RYUJINX)]


def test_scan_directory_errors(service, tmp_path):
    success, message = service.scan_directory(str(tmp_path / "nowhere"), "yuzu")
    assert success is False
    assert "does not exist" in message

    success, message = service.scan_directory(str(tmp_path), "cemu")
    assert success is False
    assert "Unknown emulator" in message


def test_launch_unknown_emulator(service):
    data = {"id": "x", "title": "T", "path": "/g/T.nsp", "icon": None, "emulator": "cemu"}
    assert service.launch(data) == (False, "Unknown emulator")


def test_launch_spawn_failure(service, monkeypatch):
    def raise_missing(args):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(game_launcher.subprocess, "Popen", raise_missing)
    entry = CatalogEntry(id="x", title="T", path="/g/T.nsp", icon=None, emulator=EmulatorKind.YUZU)

    success, message = service.launch(entry)
    assert success is False
    assert message.startswith("Failed to launch game: ")
    assert "No such file or directory" in message


def test_launch_uses_configured_executable(tmp_path, monkeypatch):
    FakePopen.calls = []
    monkeypatch.setattr(game_launcher.subprocess, "Popen", FakePopen)
    service = LibraryService(
        session=ScanSession(home_dir=str(tmp_path)),
        settings={"emulator_paths": {"ryujinx": "/opt/ryujinx/Ryujinx"}},
    )
    data = {"id": "x", "title": "T", "path": "/g/T.nsp", "icon": None, "emulator": "ryujinx"}

    success, _message = service.launch(data)
    assert success is True
    assert FakePopen.calls == [["/opt/ryujinx/Ryujinx", "/g/T.nsp"]]


def test_default_executable_names():
    assert game_launcher.get_emulator_executable("yuzu", system="Windows") == "yuzu.exe"
    assert game_launcher.get_emulator_executable("ryujinx", system="Windows") == "Ryujinx.exe"
    assert game_launcher.get_emulator_executable("yuzu", system="Linux") == "yuzu"
    assert game_launcher.get_emulator_executable("ryujinx", system="Darwin") == "Ryujinx"


def test_headless_scan_prints_json(service, rom, capsys):
    assert main.run_headless_scan(service, "all") == 0

    catalog = json.loads(capsys.readouterr().out)
    assert len(catalog) == 1
    assert catalog[0]["path"] == rom
    assert catalog[0]["emulator"] == "yuzu"
    assert set(catalog[0]) == {"id", "title", "path", "icon", "emulator"}


def test_headless_folder_scan(service, tmp_path, capsys):
    folder = tmp_path / "Loose"
    folder.mkdir()
    (folder / "Pikmin.nsp").write_bytes(b"rom")

    assert main.run_headless_scan(service, "ryujinx", directory=str(folder)) == 0

    catalog = json.loads(capsys.readouterr().out)
    assert [(g["title"], g["emulator"]) for g in catalog] == [("Pikmin", "ryujinx")]


def test_headless_scan_failure_exit_code(service, tmp_path, capsys):
    assert main.run_headless_scan(service, "yuzu", directory=str(tmp_path / "missing")) == 1
    assert capsys.readouterr().out == ""


def test_first_launch_writes_default_settings(tmp_path, monkeypatch, capsys):
    settings_path = tmp_path / "settings.json"
    monkeypatch.setattr(settings_manager, "get_settings_path", lambda: str(settings_path))
    folder = tmp_path / "Loose"
    folder.mkdir()

    assert main.main(["--scan-dir", str(folder)]) == 0

    assert json.loads(capsys.readouterr().out) == []
    assert json.loads(settings_path.read_text(encoding="utf-8")) == settings_manager.get_default_settings()
