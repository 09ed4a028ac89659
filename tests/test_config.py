import json

from gtxtranslate.utils.config import ConfigManager, TranslatorSettings


def test_defaults_without_file():
    manager = ConfigManager()
    assert manager.translator_settings == TranslatorSettings()
    assert manager.translator_settings.target_language == "en"
    assert manager.translator_settings.max_chunk_chars == 4500
    assert manager.translator_settings.cache_ttl == 86400


def test_missing_file_keeps_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "absent.json")
    assert manager.translator_settings == TranslatorSettings()
    assert not (tmp_path / "absent.json").exists()


def test_load_ignores_unknown_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "translator_settings": {"target_language": "de", "max_chunk_chars": 1000, "bogus": 1},
        "logging_settings": {"level": "DEBUG"},
        "unknown_section": {},
    }), encoding="utf-8")

    manager = ConfigManager(path)

    assert manager.translator_settings.target_language == "de"
    assert manager.translator_settings.max_chunk_chars == 1000
    assert manager.translator_settings.source_language == "auto"
    assert manager.logging_settings.level == "DEBUG"
    assert manager.get_setting("translator.target_language") == "de"
    assert manager.get_setting("nope.value", "fallback") == "fallback"


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    manager = ConfigManager()
    manager.translator_settings.target_language = "ja"
    manager.save_config(path)

    reloaded = ConfigManager(path)
    assert reloaded.translator_settings.target_language == "ja"
    assert list(path.parent.iterdir()) == [path]


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    manager = ConfigManager(path)

    assert manager.translator_settings == TranslatorSettings()
    assert manager.load_config() is False
    assert str(path) in manager.load_error
    assert "Error loading config file" in caplog.text


def test_non_object_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    manager = ConfigManager(path)

    assert manager.translator_settings == TranslatorSettings()
    assert manager.load_error.endswith("expected a JSON object")
