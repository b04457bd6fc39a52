# icon_resolver.py
# -*- coding: utf-8 -*-
"""
Finds a displayable icon for a ROM file.

Strategies are tried in order and the first one returning a value wins:
local image files next to the ROM, a folder named after the ROM, the
emulator's own icon cache, a remote URL built from the title id found in
the file name, and finally a generic placeholder. No network access
happens here, remote icons are only referenced by URL.
"""
import os
import re
import base64
import logging
from typing import Optional, Callable, List

import config
from utils import is_title_id

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

_NON_ALNUM_RE = re.compile(r'[^0-9A-Za-z]+')


def _mime_type_for(icon_name: str) -> str:
    return "image/png" if icon_name.endswith(".png") else "image/jpeg"


def _read_as_data_uri(icon_path: str, mime_type: str) -> Optional[str]:
    try:
        with open(icon_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        log.debug(f"Icon '{icon_path}' exists but could not be read: {e}")
        return None
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def _first_icon_in(folder: str, icon_names) -> Optional[str]:
    for icon_name in icon_names:
        icon_path = os.path.join(folder, icon_name)
        if os.path.isfile(icon_path):
            icon = _read_as_data_uri(icon_path, _mime_type_for(icon_name))
            if icon:
                return icon
    return None


def find_sibling_icon(rom_path: str) -> Optional[str]:
    """icon/cover/boxart images in the ROM's own folder."""
    return _first_icon_in(os.path.dirname(rom_path), config.SIBLING_ICON_NAMES)


def find_game_folder_icon(rom_path: str) -> Optional[str]:
    """icon/cover images inside a folder named like the ROM (without extension)."""
    stem = os.path.splitext(os.path.basename(rom_path))[0]
    game_folder = os.path.join(os.path.dirname(rom_path), stem)
    if not os.path.isdir(game_folder):
        return None
    return _first_icon_in(game_folder, config.GAME_FOLDER_ICON_NAMES)


def find_local_icon(rom_path: str) -> Optional[str]:
    return find_sibling_icon(rom_path) or find_game_folder_icon(rom_path)


def find_title_id(rom_path: str) -> Optional[str]:
    """
    Extracts a Switch title id from a ROM file name.

    The name is split on every non-alphanumeric character and the first
    16 character hex token is returned uppercased, so both
    "[0100000000010000] Game.nsp" and "0100000000010000 - Game.xci" match.
    """
    file_name = os.path.basename(rom_path)
    for token in _NON_ALNUM_RE.split(file_name):
        if is_title_id(token):
            return token.upper()
    return None


def title_id_icon_url(rom_path: str) -> Optional[str]:
    title_id = find_title_id(rom_path)
    if title_id is None:
        return None
    return config.TITLE_ID_ICON_URL.format(title_id=title_id)


def default_icon(rom_path: str = None) -> str:
    return config.PLACEHOLDER_ICON_URL


def _cached_icon_strategy(icon_cache) -> Callable[[str], Optional[str]]:
    def find_cached_icon(rom_path: str) -> Optional[str]:
        title_id = find_title_id(rom_path)
        if title_id is None:
            return None
        return icon_cache.get(title_id)
    return find_cached_icon


def get_strategies(icon_cache=None) -> List[Callable[[str], Optional[str]]]:
    """Ordered icon strategies. icon_cache maps TitleID (UPPER) -> icon reference."""
    strategies = [find_sibling_icon, find_game_folder_icon]
    if icon_cache:
        strategies.append(_cached_icon_strategy(icon_cache))
    strategies.append(title_id_icon_url)
    strategies.append(default_icon)
    return strategies


def first_success(strategies, rom_path: str) -> Optional[str]:
    for strategy in strategies:
        result = strategy(rom_path)
        if result:
            return result
    return None


def resolve(rom_path: str, icon_cache=None) -> Optional[str]:
    """Returns the best icon reference for rom_path (data URI or URL)."""
    return first_success(get_strategies(icon_cache), rom_path)
