import json

import config
import settings_manager


def test_missing_file_returns_defaults(tmp_path):
    settings, first_launch = settings_manager.load_settings(str(tmp_path / "settings.json"))
    assert first_launch is True
    assert settings == settings_manager.get_default_settings()


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "extra_config_roots": "not-a-list",
        "emulator_paths": {"yuzu": 3},
        "log_level": "loud",
    }), encoding="utf-8")

    settings, first_launch = settings_manager.load_settings(str(path))
    assert first_launch is False
    assert settings["extra_config_roots"] == []
    assert settings["emulator_paths"] == {}
    assert settings["log_level"] == "INFO"


def test_saved_settings_are_loaded(tmp_path):
    path = str(tmp_path / "settings.json")
    assert settings_manager.save_settings({"extra_config_roots": ["/emu"], "log_level": "debug"}, path)

    settings, first_launch = settings_manager.load_settings(path)
    assert first_launch is False
    assert settings["extra_config_roots"] == ["/emu"]
    assert settings["log_level"] == "DEBUG"
    assert settings["emulator_paths"] == {}


def test_corrupt_file_treated_as_first_launch(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    settings, first_launch = settings_manager.load_settings(str(path))
    assert first_launch is True
    assert settings == settings_manager.get_default_settings()


def test_app_data_folder_follows_xdg_data_home(tmp_path, monkeypatch):
    monkeypatch.setattr(config.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    folder = config.get_app_data_folder()
    assert folder == str(tmp_path / "data" / config.APP_NAME)
    assert (tmp_path / "data" / config.APP_NAME).is_dir()
    assert settings_manager.get_settings_path() == str(tmp_path / "data" / config.APP_NAME / "settings.json")


def test_app_data_folder_unknown_system_uses_working_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(config.platform, "system", lambda: "Plan9")
    monkeypatch.chdir(tmp_path)

    assert config.get_app_data_folder() == str(tmp_path / config.APP_NAME)
