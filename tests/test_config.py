"""Tests for engine configuration loading."""

import logging

import pytest
import yaml

from piccy import EngineConfig, ImageIOError, InputError, OutputFormat
from piccy.core.config import CONFIG_ENV_VAR, get_config, load_config, save_config, set_config


class TestEngineConfig:
    """Field validation and conversion."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.default_gif_delay_ms == 20
        assert config.max_workers is None
        assert config.output_format is OutputFormat.PNG
        assert config.webp_lossless is True
        assert config.worker_count >= 1

    def test_explicit_workers(self) -> None:
        assert EngineConfig(max_workers=3).worker_count == 3

    @pytest.mark.parametrize("kwargs", [
        {'default_gif_delay_ms': -1},
        {'max_workers': 0},
        {'intermediate_format': 'tiff'},
        {'gif_transparency_threshold': 300},
        {'gif_transparency_threshold': 'abc'},
        {'gif_transparency_threshold': None},
        {'gif_transparency_threshold': 12.5},
        {'webp_lossless': 'yes'},
        {'default_gif_delay_ms': True},
        {'intermediate_format': None},
    ])
    def test_invalid_values(self, kwargs) -> None:
        with pytest.raises(InputError):
            EngineConfig(**kwargs)

    def test_dict_round_trip(self) -> None:
        config = EngineConfig(default_gif_delay_ms=40, max_workers=2)
        assert EngineConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys_warn(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger='piccy.core.config'):
            config = EngineConfig.from_dict({'default_gif_delay_ms': 30, 'colour': 'blue'})
        assert config.default_gif_delay_ms == 30
        assert 'colour' in caplog.text


class TestLoadConfig:
    """YAML files and the environment override."""

    def test_no_file_gives_defaults(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr('piccy.core.config.DEFAULT_CONFIG_PATH', tmp_path / 'absent.yaml')
        assert load_config() == EngineConfig()

    def test_explicit_path(self, tmp_path) -> None:
        path = tmp_path / 'config.yaml'
        path.write_text('default_gif_delay_ms: 60\nmax_workers: 2\n')
        config = load_config(path)
        assert config.default_gif_delay_ms == 60
        assert config.max_workers == 2

    def test_nested_section(self, tmp_path) -> None:
        path = tmp_path / 'config.yaml'
        path.write_text('piccy:\n  intermediate_format: webp\n')
        assert load_config(path).output_format is OutputFormat.WEBP

    def test_env_var(self, monkeypatch, tmp_path) -> None:
        path = tmp_path / 'env.yaml'
        path.write_text('default_gif_delay_ms: 90\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        set_config(None)
        assert get_config().default_gif_delay_ms == 90

    def test_empty_file(self, tmp_path, caplog) -> None:
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        with caplog.at_level(logging.WARNING, logger='piccy.core.config'):
            assert load_config(path) == EngineConfig()
        assert 'empty' in caplog.text

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ImageIOError):
            load_config(tmp_path / 'missing.yaml')

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / 'bad.yaml'
        path.write_text('default_gif_delay_ms: [1, 2\n')
        with pytest.raises(InputError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / 'list.yaml'
        path.write_text('- 1\n- 2\n')
        with pytest.raises(InputError, match="mapping"):
            load_config(path)

    def test_save_then_load(self, tmp_path) -> None:
        config = EngineConfig(default_gif_delay_ms=45, webp_lossless=False)
        path = save_config(config, tmp_path / 'nested' / 'config.yaml')
        assert yaml.safe_load(path.read_text())['default_gif_delay_ms'] == 45
        assert load_config(path) == config

    def test_wrong_type_from_yaml(self, tmp_path) -> None:
        path = tmp_path / 'typed.yaml'
        path.write_text('gif_transparency_threshold: abc\n')
        with pytest.raises(InputError, match="gif_transparency_threshold"):
            load_config(path)
