# game_launcher.py
# -*- coding: utf-8 -*-

import logging
import platform
import subprocess

import config
from emulator_utils.emulator_manager import parse_emulator_kind

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def get_emulator_executable(kind, emulator_paths=None, system=None) -> str:
    """
    Returns the executable used to launch games for an emulator.

    A path configured in settings wins over the per-OS default name,
    which is looked up on PATH.
    """
    kind = parse_emulator_kind(kind)
    configured = (emulator_paths or {}).get(kind.value)
    if configured:
        return configured
    names = config.EMULATOR_EXECUTABLES[kind.value]
    return names.get(system or platform.system(), names["default"])


def launch_game(entry, emulator_paths=None):
    """
    Starts the emulator with the entry's ROM as its only argument.

    Does not wait for the emulator to exit. Returns (success, message).
    """
    try:
        kind = parse_emulator_kind(entry.emulator)
    except ValueError:
        log.warning(f"Cannot launch '{entry.title}': unknown emulator '{entry.emulator}'.")
        return False, "Unknown emulator"

    executable = get_emulator_executable(kind, emulator_paths)
    log.info(f"Launching '{entry.title}' with {executable}...")
    try:
        subprocess.Popen([executable, entry.path])
    except OSError as e:
        log.error(f"Failed to start {executable} for '{entry.path}': {e}")
        return False, f"Failed to launch game: {e}"
    return True, f"Launched '{entry.title}'."
