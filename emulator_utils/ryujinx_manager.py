# emulator_utils/ryujinx_manager.py
# -*- coding: utf-8 -*-

import os
import base64
import logging

import config
import fs_walker
from utils import is_title_id

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler()) # Avoid 'No handler found' warnings

RYUJINX_FLATPAK_ID = "org.ryujinx.Ryujinx"

# Ryujinx configuration roots, relative to the user's home (all OS layouts are probed)
RYUJINX_CONFIG_ROOTS = [
    os.path.join(".config", "Ryujinx"),
    os.path.join("AppData", "Roaming", "Ryujinx"),
    os.path.join("Library", "Application Support", "Ryujinx"),
    os.path.join(".var", "app", RYUJINX_FLATPAK_ID, "config", "Ryujinx"),
]

# Portable installs keep games next to the executable; checked on every OS.
RYUJINX_FIXED_PORTABLE_GAME_DIR = "C:/Ryujinx/games"

SAVE_CACHE_SUBPATH = os.path.join(
    "bis", "user", "save", "0000000000000000", "0000000000000000", "cache"
)


def get_ryujinx_config_roots(home_dir: str) -> list:
    return [os.path.join(home_dir, rel_path) for rel_path in RYUJINX_CONFIG_ROOTS]


def probe_ryujinx_game_dirs(home_dir: str) -> list:
    """Returns every candidate Ryujinx game folder (unfiltered)."""
    candidates = [os.path.join(root, "games") for root in get_ryujinx_config_roots(home_dir)]
    candidates.append(os.path.join(home_dir, "Ryujinx", "games"))
    candidates.append(RYUJINX_FIXED_PORTABLE_GAME_DIR)
    return candidates


def get_icon_cache_dirs(home_dir: str) -> list:
    """Save-cache folders where Ryujinx may keep per-title icon images."""
    return [os.path.join(root, SAVE_CACHE_SUBPATH) for root in get_ryujinx_config_roots(home_dir)]


def _encode_icon(icon_path: str):
    mime_type = "image/png" if icon_path.lower().endswith(".png") else "image/jpeg"
    try:
        with open(icon_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        log.debug(f"Could not read cached icon '{icon_path}': {e}")
        return None
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def load_icon_cache(cache_dirs) -> dict:
    """
    Collects cached icons from Ryujinx save-cache folders.

    An image counts when its parent folder name is a 16 hex character title id.
    Returns a map TitleID (UPPER) -> data URI; the first image found per title wins.
    """
    icon_map = {}
    for cache_dir in cache_dirs:
        if not os.path.isdir(cache_dir):
            continue
        log.info(f"Scanning Ryujinx icon cache: {cache_dir}")
        for path in fs_walker.walk(cache_dir, config.ICON_CACHE_SCAN_DEPTH):
            if not path.lower().endswith(config.CACHED_ICON_EXTENSIONS):
                continue
            title_id = os.path.basename(os.path.dirname(path))
            if not is_title_id(title_id):
                continue
            title_id_upper = title_id.upper()
            if title_id_upper in icon_map:
                continue
            icon = _encode_icon(path)
            if icon:
                log.debug(f"  Found cached icon for title ID: {title_id_upper}")
                icon_map[title_id_upper] = icon

    if icon_map:
        log.info(f"Loaded {len(icon_map)} cached Ryujinx icons.")
    return icon_map
