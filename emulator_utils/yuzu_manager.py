# emulator_utils/yuzu_manager.py
# -*- coding: utf-8 -*-

import os
import logging

import config
import fs_walker
from .qt_config_reader import read_game_dirs

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

YUZU_CONFIG_FILENAME = "qt-config.ini"
YUZU_FLATPAK_ID = "org.yuzu_emu.yuzu"

# Default game folders, relative to the user's home (all OS layouts are probed)
YUZU_STATIC_GAME_DIRS = [
    os.path.join(".local", "share", "yuzu", "load"),
    os.path.join(".local", "share", "yuzu", "nand", "user", "Contents", "registered"),
    os.path.join("AppData", "Roaming", "yuzu", "load"),
    os.path.join("AppData", "Roaming", "yuzu", "nand", "user", "Contents", "registered"),
    os.path.join("Library", "Application Support", "yuzu", "load"),
    os.path.join(".var", "app", YUZU_FLATPAK_ID, "data", "yuzu", "load"),
    # Common places users keep their dumps
    os.path.join("Documents", "Yuzu", "games"),
    os.path.join("Games", "Switch"),
    os.path.join("Games", "Yuzu"),
    "Downloads",
    os.path.join("Downloads", "Switch"),
]

# Standard qt-config.ini locations, relative to the user's home
YUZU_STANDARD_CONFIG_FILES = [
    os.path.join("AppData", "Roaming", "yuzu", YUZU_CONFIG_FILENAME),
    os.path.join("AppData", "Roaming", "yuzu", "config", YUZU_CONFIG_FILENAME),
    os.path.join(".local", "share", "yuzu", YUZU_CONFIG_FILENAME),
    os.path.join(".config", "yuzu", YUZU_CONFIG_FILENAME),
    os.path.join("Library", "Application Support", "yuzu", YUZU_CONFIG_FILENAME),
    os.path.join(".var", "app", YUZU_FLATPAK_ID, "config", "yuzu", YUZU_CONFIG_FILENAME),
]


def get_portable_game_dirs(config_file_path: str) -> list:
    """
    Derives the game folders of the install owning a qt-config.ini.

    The user root is the config file's grandparent (e.g. <root>/config/qt-config.ini
    for a portable 'user' folder).
    """
    user_root = os.path.dirname(os.path.dirname(config_file_path))
    return [
        os.path.join(user_root, "load"),
        os.path.join(user_root, "nand", "user", "Contents", "registered"),
    ]


def find_yuzu_config_paths(home_dir: str, extra_config_roots=()) -> list:
    """
    Finds Yuzu qt-config.ini files: standard locations, portable installs
    unpacked somewhere under Downloads, and user-configured extra folders.
    """
    config_paths = []
    for rel_path in YUZU_STANDARD_CONFIG_FILES:
        candidate = os.path.join(home_dir, rel_path)
        if os.path.isfile(candidate):
            log.debug(f"Found standard Yuzu config: {candidate}")
            config_paths.append(candidate)

    downloads_dir = os.path.join(home_dir, "Downloads")
    if os.path.isdir(downloads_dir):
        found = fs_walker.find_files_named(
            downloads_dir, YUZU_CONFIG_FILENAME, config.DOWNLOADS_CONFIG_SCAN_DEPTH,
            path_must_contain="yuzu",
        )
        for path in found:
            log.info(f"Found portable Yuzu config in Downloads: {path}")
        config_paths.extend(found)

    for root in extra_config_roots:
        if not os.path.isdir(root):
            log.warning(f"Configured Yuzu search folder does not exist: {root}")
            continue
        found = fs_walker.find_files_named(
            root, YUZU_CONFIG_FILENAME, config.CONFIG_SCAN_DEPTH,
            path_must_contain="yuzu",
        )
        config_paths.extend(found)

    return config_paths


def probe_yuzu_game_dirs(home_dir: str, extra_config_roots=()) -> list:
    """Returns every candidate Yuzu game folder (unfiltered, may contain duplicates)."""
    candidates = [os.path.join(home_dir, rel_path) for rel_path in YUZU_STATIC_GAME_DIRS]

    for config_path in find_yuzu_config_paths(home_dir, extra_config_roots):
        custom_dirs = read_game_dirs(config_path)
        if custom_dirs:
            log.debug(f"  Custom game dirs from {config_path}: {custom_dirs}")
        candidates.extend(custom_dirs)
        candidates.extend(get_portable_game_dirs(config_path))

    return candidates
