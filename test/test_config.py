"""
Tests for TOML configuration loading and the environment overrides.
"""

import pytest

from radio_maps.config import ExecutionConfig, load_config, save_config


@pytest.fixture
def sample_toml_content():
    return """
[execution]
nb_workers = 8
chunk_size = 32
batch_size = 512
"""


@pytest.fixture
def temp_toml_file(tmp_path, sample_toml_content):
    filepath = tmp_path / "execution.toml"
    filepath.write_text(sample_toml_content)
    return filepath


def test_load_config(temp_toml_file):
    config = load_config(temp_toml_file)
    assert config == ExecutionConfig(nb_workers=8, chunk_size=32, batch_size=512)
    assert config.resolved_nb_workers == 8


def test_missing_table_gives_defaults(tmp_path):
    filepath = tmp_path / "other.toml"
    filepath.write_text("[something_else]\nkey = 1\n")
    config = load_config(filepath)
    assert config == ExecutionConfig()
    assert config.nb_workers is None
    assert config.resolved_nb_workers >= 1


def test_save_load_roundtrip(tmp_path):
    for config in [ExecutionConfig(), ExecutionConfig(nb_workers=2, chunk_size=1, batch_size=7)]:
        filepath = tmp_path / "saved.toml"
        save_config(config, filepath)
        assert load_config(filepath) == config


def test_unknown_setting(tmp_path):
    filepath = tmp_path / "typo.toml"
    filepath.write_text("[execution]\nnb_worker = 4\n")
    with pytest.raises(ValueError, match="nb_worker"):
        load_config(filepath)


@pytest.mark.parametrize("settings", [{"nb_workers": 0}, {"chunk_size": -3}, {"batch_size": 2.5}, {"chunk_size": True}])
def test_invalid_values(settings):
    with pytest.raises(ValueError):
        ExecutionConfig(**settings)


def test_from_env():
    environ = {"RADIO_MAPS_NB_WORKERS": "5", "RADIO_MAPS_BATCH_SIZE": "100", "RADIO_MAPS_CHUNK_SIZE": " "}
    config = ExecutionConfig.from_env(environ)
    assert config == ExecutionConfig(nb_workers=5, batch_size=100)
    assert ExecutionConfig.from_env({}) == ExecutionConfig()
