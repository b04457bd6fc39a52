import os

import pytest

from emulator_utils.emulator_manager import EmulatorKind, parse_emulator_kind, probe
from emulator_utils import yuzu_manager, ryujinx_manager


def _write_config(path, game_dir):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("[UI]\n")
        f.write(f"Paths\\gamedirs\\1\\path={game_dir}\n")


def test_parse_emulator_kind():
    assert parse_emulator_kind("yuzu") is EmulatorKind.YUZU
    assert parse_emulator_kind(" Ryujinx ") is EmulatorKind.RYUJINX
    assert parse_emulator_kind(EmulatorKind.YUZU) is EmulatorKind.YUZU
    with pytest.raises(ValueError):
        parse_emulator_kind("citra")
    with pytest.raises(ValueError):
        parse_emulator_kind(None)


def test_static_candidates_sorted_and_unique(tmp_path):
    home = str(tmp_path)
    candidates = probe(home, EmulatorKind.YUZU)

    assert candidates == sorted(set(candidates))
    assert os.path.join(home, "Downloads") in candidates
    assert os.path.join(home, "Downloads", "Switch") in candidates
    assert os.path.join(home, "Games", "Switch") in candidates
    assert os.path.join(home, "AppData", "Roaming", "yuzu", "nand", "user", "Contents", "registered") in candidates


def test_standard_config_adds_custom_and_derived_dirs(tmp_path):
    home = str(tmp_path)
    config_file = os.path.join(home, "AppData", "Roaming", "yuzu", "config", "qt-config.ini")
    _write_config(config_file, "/mnt/custom/switch")

    candidates = probe(home, EmulatorKind.YUZU)

    assert "/mnt/custom/switch" in candidates
    # grandparent of config/qt-config.ini is the yuzu user root
    assert os.path.join(home, "AppData", "Roaming", "yuzu", "load") in candidates
    assert candidates.count(os.path.join(home, "AppData", "Roaming", "yuzu", "load")) == 1


def test_portable_config_found_in_downloads(tmp_path):
    home = str(tmp_path)
    user_root = os.path.join(home, "Downloads", "yuzu-windows-msvc", "user")
    _write_config(os.path.join(user_root, "config", "qt-config.ini"), "/mnt/portable/roms")

    candidates = probe(home, EmulatorKind.YUZU)

    assert "/mnt/portable/roms" in candidates
    assert os.path.join(user_root, "load") in candidates
    assert os.path.join(user_root, "nand", "user", "Contents", "registered") in candidates


def test_downloads_config_outside_emulator_folder_is_ignored(tmp_path):
    home = str(tmp_path)
    _write_config(os.path.join(home, "Downloads", "other-app", "config", "qt-config.ini"), "/mnt/unrelated")

    assert "/mnt/unrelated" not in probe(home, EmulatorKind.YUZU)


def test_downloads_config_search_depth(tmp_path):
    home = str(tmp_path)
    downloads = os.path.join(home, "Downloads")
    shallow = os.path.join(downloads, "a", "b", "c", "d", "yuzu", "qt-config.ini")
    deep = os.path.join(downloads, "a", "b", "c", "d", "e", "yuzu", "qt-config.ini")
    _write_config(shallow, "/mnt/shallow")
    _write_config(deep, "/mnt/deep")

    found = yuzu_manager.find_yuzu_config_paths(home)
    assert shallow in found
    assert deep not in found


def test_extra_config_roots_searched(tmp_path):
    home = str(tmp_path / "home")
    os.makedirs(home)
    extra_root = str(tmp_path / "emulators")
    _write_config(os.path.join(extra_root, "yuzu", "qt-config.ini"), "/mnt/extra")

    candidates = probe(home, EmulatorKind.YUZU, [extra_root, str(tmp_path / "missing")])
    assert "/mnt/extra" in candidates


def test_ryujinx_candidates(tmp_path):
    home = str(tmp_path)
    candidates = probe(home, EmulatorKind.RYUJINX)

    assert candidates == sorted(set(candidates))
    assert "C:/Ryujinx/games" in candidates
    assert os.path.join(home, "Ryujinx", "games") in candidates
    assert os.path.join(home, ".config", "Ryujinx", "games") in candidates
    assert os.path.join(home, "AppData", "Roaming", "Ryujinx", "games") in candidates


def test_ryujinx_icon_cache(tmp_path):
    home = str(tmp_path)
    cache_dir = ryujinx_manager.get_icon_cache_dirs(home)[0]
    title_dir = os.path.join(cache_dir, "0100000000010000")
    os.makedirs(title_dir)
    with open(os.path.join(title_dir, "icon.png"), "wb") as f:
        f.write(b"png")
    os.makedirs(os.path.join(cache_dir, "not-a-title"))
    with open(os.path.join(cache_dir, "not-a-title", "icon.png"), "wb") as f:
        f.write(b"png")

    icon_map = ryujinx_manager.load_icon_cache(ryujinx_manager.get_icon_cache_dirs(home))

    assert list(icon_map) == ["0100000000010000"]
    assert icon_map["0100000000010000"] == "data:image/png;base64,cG5n"
