import json

import pytest

from locale_sync.errors import ConfigurationError
from locale_sync.settings import FileSystemConfig, InMemoryConfig, load_config, parse_config

FS_CONFIG = {
    "target_locales": ["en", "fr-CA"],
    "locales_path": "locales",
    "source_path": "en.json",
    "source_locale": "en",
}


def test_config_without_type_is_file_system():
    config = parse_config(FS_CONFIG)

    assert isinstance(config, FileSystemConfig)
    assert config.target_locales == ["en", "fr-CA"]
    assert config.excluded_files == []


def test_in_memory_config():
    config = parse_config({
        "type": "in_memory",
        "target_locales": ["de"],
        "source_locale": "en",
        "source": '{"a": "b"}',
    })

    assert isinstance(config, InMemoryConfig)
    assert config.previous_output is None


@pytest.mark.parametrize(
    "override",
    [
        {"target_locales": ["en", "xx-YY"]},
        {"source_locale": "english"},
        {"target_locales": ["fr", "fr"]},
        {"target_locales": []},
        {"source_path": ""},
        {"unexpected": True},
        {"type": "s3"},
    ],
)
def test_invalid_configs_are_rejected(override):
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        parse_config({**FS_CONFIG, **override})


def test_in_memory_fields_are_not_mixed_with_file_system():
    with pytest.raises(ConfigurationError):
        parse_config({**FS_CONFIG, "type": "in_memory"})


def test_load_config_reads_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({**FS_CONFIG, "excluded_files": ["index.json"]}), encoding="utf-8")

    config = load_config(path)

    assert config.excluded_files == ["index.json"]


def test_load_config_missing_or_broken_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(broken)
