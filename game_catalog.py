# game_catalog.py
# -*- coding: utf-8 -*-
"""
Session-scoped game catalog.

A ScanSession accumulates CatalogEntry records discovered by scanning the
emulators' game folders or added by hand. Nothing is persisted; the owner of
the session decides its lifetime and serializes access to it.
"""
import os
import hashlib
import logging
from dataclasses import dataclass, asdict
from typing import Optional, List

import config
import fs_walker
import icon_resolver
from emulator_utils.emulator_manager import EmulatorKind, parse_emulator_kind, probe, get_emulator_display_name
from emulator_utils.ryujinx_manager import get_icon_cache_dirs, load_icon_cache
from utils import lossy_path_str

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def assign_id(path_str: str) -> str:
    """Stable catalog id for a ROM path: md5 hex digest of its UTF-8 bytes."""
    return hashlib.md5(path_str.encode('utf-8', 'replace')).hexdigest()


@dataclass
class CatalogEntry:
    id: str
    title: str
    path: str
    icon: Optional[str]
    emulator: EmulatorKind

    def to_dict(self) -> dict:
        data = asdict(self)
        data['emulator'] = self.emulator.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        """Rebuilds an entry from serialized input. Unknown emulator tags raise ValueError."""
        return cls(
            id=data['id'],
            title=data['title'],
            path=data['path'],
            icon=data.get('icon'),
            emulator=parse_emulator_kind(data['emulator']),
        )


def is_rom_file(path: str) -> bool:
    # A bare dotfile such as ".nsp" has no extension
    stem, dot, extension = os.path.basename(path).rpartition('.')
    return bool(dot and stem) and extension in config.ROM_EXTENSIONS


class ScanSession:
    def __init__(self, home_dir=None, extra_config_roots=()):
        self.home_dir = home_dir or os.path.expanduser("~")
        self.extra_config_roots = list(extra_config_roots)
        self.entries: List[CatalogEntry] = []
        self.seen_paths = set()

    def reset(self):
        """Clears the catalog before a new scan."""
        self.entries.clear()
        self.seen_paths.clear()

    def scan_yuzu(self) -> int:
        return self.scan(EmulatorKind.YUZU)

    def scan_ryujinx(self) -> int:
        return self.scan(EmulatorKind.RYUJINX)

    def scan(self, kind) -> int:
        """
        Scans every existing candidate folder of an emulator and adds new ROMs.

        Paths already in the session are skipped, so re-scanning an unchanged
        filesystem adds nothing. Returns the number of entries added.
        """
        kind = parse_emulator_kind(kind)
        display_name = get_emulator_display_name(kind)
        log.info(f"Scanning {display_name} game folders...")

        icon_cache = None
        if kind is EmulatorKind.RYUJINX:
            icon_cache = load_icon_cache(get_icon_cache_dirs(self.home_dir))

        added = 0
        for game_dir in probe(self.home_dir, kind, self.extra_config_roots):
            if not os.path.isdir(game_dir):
                continue
            log.debug(f"  Scanning folder: {game_dir}")
            added += self._scan_directory(game_dir, kind, icon_cache)

        log.info(f"Found {added} new {display_name} games ({len(self.entries)} in catalog).")
        return added

    def scan_directory(self, directory, kind) -> int:
        """
        Scans a single user-chosen folder and tags its ROMs with kind.

        Same depth limit and seen-paths rule as an emulator scan. Raises
        FileNotFoundError if directory is not an existing folder and
        ValueError for an unknown emulator.
        """
        kind = parse_emulator_kind(kind)
        if not os.path.isdir(directory):
            raise FileNotFoundError(f"Game folder does not exist: {directory}")

        icon_cache = None
        if kind is EmulatorKind.RYUJINX:
            icon_cache = load_icon_cache(get_icon_cache_dirs(self.home_dir))

        log.info(f"Scanning folder '{directory}' for {get_emulator_display_name(kind)} games...")
        added = self._scan_directory(os.path.abspath(directory), kind, icon_cache)
        log.info(f"Found {added} new games in '{directory}' ({len(self.entries)} in catalog).")
        return added

    def _scan_directory(self, game_dir, kind, icon_cache) -> int:
        added = 0
        for file_path in fs_walker.walk(game_dir, config.ROM_SCAN_DEPTH):
            if not is_rom_file(file_path):
                continue
            path_str = lossy_path_str(file_path)
            if path_str in self.seen_paths:
                continue
            self.seen_paths.add(path_str)

            title = lossy_path_str(os.path.splitext(os.path.basename(file_path))[0])
            entry = CatalogEntry(
                id=assign_id(path_str),
                title=title,
                path=path_str,
                icon=icon_resolver.resolve(file_path, icon_cache),
                emulator=kind,
            )
            log.debug(f"    Found game: '{title}' ({path_str})")
            self.entries.append(entry)
            added += 1
        return added

    def add_game(self, title, path, emulator) -> CatalogEntry:
        """
        Adds a game by hand.

        Raises FileNotFoundError if path does not exist and ValueError for an
        unknown emulator; the catalog is left untouched in both cases.
        The seen-paths set is neither checked nor updated, so a manual add
        may duplicate a scanned path.
        """
        kind = parse_emulator_kind(emulator)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Game file does not exist: {path}")

        abs_path = os.path.abspath(path)
        path_str = lossy_path_str(abs_path)
        entry = CatalogEntry(
            id=assign_id(path_str),
            title=title,
            path=path_str,
            icon=icon_resolver.resolve(abs_path),
            emulator=kind,
        )
        self.entries.append(entry)
        log.info(f"Added game '{title}' for {get_emulator_display_name(kind)}.")
        return entry

    def get_games(self) -> List[CatalogEntry]:
        return list(self.entries)
