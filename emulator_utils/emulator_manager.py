# emulator_utils/emulator_manager.py
# -*- coding: utf-8 -*-

import logging
from enum import Enum
from typing import Dict, List, Callable, Any, Iterable

from .yuzu_manager import probe_yuzu_game_dirs
from .ryujinx_manager import probe_ryujinx_game_dirs

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


class EmulatorKind(str, Enum):
    YUZU = "yuzu"
    RYUJINX = "ryujinx"

    def __str__(self):
        return self.value


# Signature: (home_dir, extra_config_roots) -> candidate game folders
GameDirProber = Callable[[str, Iterable[str]], List[str]]

# 'name' is the display name, 'game_dir_prober' lists candidate folders.
# Every EmulatorKind must have an entry.
EMULATORS: Dict[EmulatorKind, Dict[str, Any]] = {
    EmulatorKind.YUZU: {
        'name': 'Yuzu',
        'game_dir_prober': lambda home, extra_roots: probe_yuzu_game_dirs(home, extra_roots),
    },
    EmulatorKind.RYUJINX: {
        'name': 'Ryujinx',
        # Ryujinx has no user-declared folders in a qt-config.ini
        'game_dir_prober': lambda home, extra_roots: probe_ryujinx_game_dirs(home),
    },
}


def parse_emulator_kind(value) -> EmulatorKind:
    """
    Converts a boundary value (enum member or tag string) to an EmulatorKind.

    Raises ValueError for anything that is not a known emulator.
    """
    if isinstance(value, EmulatorKind):
        return value
    if isinstance(value, str):
        try:
            return EmulatorKind(value.strip().lower())
        except ValueError:
            pass
    raise ValueError(f"Unknown emulator: {value!r}")


def get_emulator_display_name(kind: EmulatorKind) -> str:
    return EMULATORS[kind]['name']


def probe(home_dir: str, kind: EmulatorKind, extra_config_roots: Iterable[str] = ()) -> List[str]:
    """
    Returns the sorted, de-duplicated candidate game folders for an emulator.

    Existence is not checked here; callers filter missing folders.
    """
    emulator_config = EMULATORS[parse_emulator_kind(kind)]
    candidates = emulator_config['game_dir_prober'](home_dir, extra_config_roots)
    unique_candidates = sorted(set(candidates))
    log.info(f"Probed {len(unique_candidates)} candidate folders for {emulator_config['name']}.")
    return unique_candidates
