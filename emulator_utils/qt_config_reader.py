# emulator_utils/qt_config_reader.py
# -*- coding: utf-8 -*-

import logging

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

GAME_DIR_KEY_MARKERS = ("gamedir", "gamedirs", "game_directory")
BYTE_ARRAY_PREFIX = "@ByteArray("


def is_game_dir_key(key_lower: str) -> bool:
    """
    True if a lower-cased key declares a game directory.

    Both conditions are required: the key mentions a game dir AND it either
    holds a path or is the game dir entry itself.
    """
    mentions_game_dir = any(marker in key_lower for marker in GAME_DIR_KEY_MARKERS)
    holds_path = (
        "path" in key_lower
        or key_lower.endswith("gamedir")
        or key_lower.endswith("gamedirs")
    )
    return mentions_game_dir and holds_path


def parse_game_dir_line(line: str):
    """Returns the directory declared by a single config line, or None."""
    line = line.strip()
    if not line or line.startswith('#') or line.startswith('['):
        return None

    key, sep, value = line.partition('=')
    if not sep:
        return None

    key_lower = key.strip().lower()
    value = value.strip()
    # One layer of surrounding quotes, as written by QSettings
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    # Nothing but quote characters is an empty value
    if not value.strip('"'):
        return None

    if not is_game_dir_key(key_lower):
        return None
    if value.startswith(BYTE_ARRAY_PREFIX):
        log.debug(f"Ignoring serialized @ByteArray value for key '{key_lower}'.")
        return None
    # Backslashes are kept verbatim, QSettings escaping is not undone.
    return value


def read_game_dirs(config_file_path) -> list:
    """
    Reads the game directories declared in a Yuzu qt-config.ini file.

    Never raises: an unreadable file yields an empty list.
    """
    try:
        with open(config_file_path, 'r', encoding='utf-8', errors='replace') as f:
            contents = f.read()
    except OSError as e:
        log.debug(f"Could not read config file '{config_file_path}': {e}")
        return []

    dirs = []
    for line in contents.splitlines():
        game_dir = parse_game_dir_line(line)
        if game_dir is not None:
            dirs.append(game_dir)

    if dirs:
        log.info(f"Found {len(dirs)} game directories in '{config_file_path}'.")
    return dirs
