# config.py
import os
import logging
import platform


# --- Application name (used for the AppData folder) ---
APP_NAME = "SwitchShelf"
APP_VERSION = "0.3.0"

# Per-OS base folder for user data; Linux honours XDG_DATA_HOME
_DATA_HOME_BY_SYSTEM = {
    "Windows": lambda: os.getenv('LOCALAPPDATA'),
    "Darwin": lambda: os.path.expanduser('~/Library/Application Support'),
    "Linux": lambda: os.getenv('XDG_DATA_HOME') or os.path.expanduser('~/.local/share'),
}


def get_app_data_folder():
    """Folder holding settings.json, created on demand.

    Falls back to a folder in the working directory when the platform has no
    known data location. Creation errors are logged, the path is still returned.
    """
    data_home = _DATA_HOME_BY_SYSTEM.get(platform.system(), lambda: None)()
    if data_home:
        app_folder = os.path.join(data_home, APP_NAME)
    else:
        logging.warning(f"No user data folder known for {platform.system()}, using the working directory.")
        app_folder = os.path.abspath(APP_NAME)

    try:
        os.makedirs(app_folder, exist_ok=True)
    except OSError as e:
        logging.error(f"Unable to create data folder {app_folder}: {e}")
    return app_folder

# --- ROM scanning ---
# Extensions are compared case-sensitively against the text after the last dot.
ROM_EXTENSIONS = {"nsp", "xci", "nca", "nro"}

# Walk depth limits (root directory = depth 0)
ROM_SCAN_DEPTH = 3
ICON_CACHE_SCAN_DEPTH = 2
CONFIG_SCAN_DEPTH = 2
DOWNLOADS_CONFIG_SCAN_DEPTH = 6

# --- Icons ---
# Checked next to the ROM file, in priority order
SIBLING_ICON_NAMES = [
    "icon.jpg",
    "icon.png",
    "cover.jpg",
    "cover.png",
    "boxart.jpg",
    "boxart.png",
]
# Checked inside a folder named after the ROM stem
GAME_FOLDER_ICON_NAMES = [
    "icon.jpg",
    "icon.png",
    "cover.jpg",
    "cover.png",
]
CACHED_ICON_EXTENSIONS = (".jpg", ".png")

TITLE_ID_ICON_URL = "https://tinfoil.media/ti/{title_id}/512/512"
PLACEHOLDER_ICON_URL = "https://via.placeholder.com/512x512/151515/FFFFFF?text=No+Icon"

# --- Emulator executables (default names looked up on PATH) ---
EMULATOR_EXECUTABLES = {
    "yuzu": {"Windows": "yuzu.exe", "default": "yuzu"},
    "ryujinx": {"Windows": "Ryujinx.exe", "default": "Ryujinx"},
}

# --- Hosting layer ---
SESSION_LOCK_TIMEOUT_S = 30
