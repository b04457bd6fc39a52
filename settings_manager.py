# settings_manager.py
import json
import os
import logging
import config # Import for default values


SETTINGS_FILENAME = "settings.json"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_settings_path() -> str:
    return os.path.join(config.get_app_data_folder(), SETTINGS_FILENAME)


def get_default_settings() -> dict:
    return {
        # Extra folders (e.g. portable emulator installs) searched for qt-config.ini
        "extra_config_roots": [],
        # Emulator key -> full path of the executable used to launch games
        "emulator_paths": {},
        "log_level": "INFO",
    }


def load_settings(settings_file_path=None):
    """Load settings from settings.json.

    Returns a tuple (settings, first_launch). Missing keys are filled with
    defaults and invalid values are replaced by their default with a warning.
    """
    settings_file_path = settings_file_path or get_settings_path()
    defaults = get_default_settings()

    if not os.path.exists(settings_file_path):
        logging.info(f"Settings file '{settings_file_path}' not found, using defaults.")
        return defaults, True

    try:
        with open(settings_file_path, 'r', encoding='utf-8') as f:
            user_settings = json.load(f)
        if not isinstance(user_settings, dict):
            raise TypeError("settings root is not a JSON object")
        logging.info(f"Settings loaded successfully from '{settings_file_path}'.")
        settings = defaults.copy()
        settings.update(user_settings)

        # --- VALIDATION extra_config_roots (list of strings) ---
        roots = settings.get("extra_config_roots")
        if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
            logging.warning("'extra_config_roots' in the settings file is not a valid list, using the default list.")
            settings["extra_config_roots"] = defaults["extra_config_roots"]

        # --- VALIDATION emulator_paths (dict str -> str) ---
        emulator_paths = settings.get("emulator_paths")
        if not isinstance(emulator_paths, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in emulator_paths.items()
        ):
            logging.warning("'emulator_paths' in the settings file is not a valid mapping, using the default.")
            settings["emulator_paths"] = defaults["emulator_paths"]

        # --- VALIDATION log_level ---
        level = settings.get("log_level")
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            logging.warning(f"Invalid log_level value ('{level}'), using default '{defaults['log_level']}'.")
            settings["log_level"] = defaults["log_level"]
        else:
            settings["log_level"] = level.upper()

        return settings, False
    except (json.JSONDecodeError, TypeError):
        logging.error(f"Failed to read or validate '{settings_file_path}'.", exc_info=True)
        return defaults, True
    except OSError:
        logging.error(f"Unexpected error reading settings from '{settings_file_path}'.", exc_info=True)
        return defaults, True


def save_settings(settings_dict, settings_file_path=None):
    """Save the settings dictionary. Returns bool (success)."""
    settings_file_path = settings_file_path or get_settings_path()
    try:
        with open(settings_file_path, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
        logging.info(f"Settings saved to '{settings_file_path}'.")
        return True
    except (OSError, TypeError) as e:
        logging.error(f"Error saving settings to '{settings_file_path}': {e}")
        return False
