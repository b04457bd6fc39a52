# emulator_utils/__init__.py
"""
Emulator discovery package.
Knows where Yuzu and Ryujinx keep their games, configs and icon caches.
"""

from emulator_utils.emulator_manager import EmulatorKind, parse_emulator_kind, probe

__all__ = [
    'EmulatorKind',
    'parse_emulator_kind',
    'probe',
]
