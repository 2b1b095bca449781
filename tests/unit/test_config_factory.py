"""
Configuration Factory Tests
Tests for the centralized configuration management system.
"""

import logging

import pytest
import yaml

from factoryman.config_factory import (
    ConfigurationFactory, FactoryManConfig, Environment, ConfigError,
    load_config, load_config_from_dict, load_config_from_yaml, get_config,
    get_config_or_default, reset_config, override_config, configure_logging
)


class TestFactoryManConfig:
    """Test FactoryManConfig dataclass"""

    def test_config_initialization_with_defaults(self):
        """Test FactoryManConfig initialization with default values"""
        config = FactoryManConfig()

        assert config.default_create_method is None
        assert config.strict_fields is True
        assert config.log_level == 'warning'
        assert config.environment == Environment.TESTING
        assert config.is_testing
        assert not config.is_development

    def test_config_validation_invalid_create_method(self):
        """Test validation fails for non-identifier method names"""
        with pytest.raises(ConfigError, match="Invalid default_create_method"):
            FactoryManConfig(default_create_method='not a method')

    def test_config_validation_invalid_log_level(self):
        """Test validation fails for unknown log levels"""
        with pytest.raises(ConfigError, match="Invalid log_level"):
            FactoryManConfig(log_level='loud')

    def test_config_validation_invalid_strict_fields(self):
        """Test validation fails for non-bool strict_fields"""
        with pytest.raises(ConfigError, match="Invalid strict_fields"):
            FactoryManConfig(strict_fields='yes')


class TestConfigurationFactory:
    """Test ConfigurationFactory"""

    def test_singleton(self):
        """Test ConfigurationFactory is a singleton"""
        assert ConfigurationFactory() is ConfigurationFactory()

    def test_get_config_before_load_fails(self):
        """Test get_config raises until something is loaded"""
        with pytest.raises(ConfigError, match="Configuration not loaded"):
            get_config()

    def test_get_config_or_default(self):
        """Test the fallback returns defaults when nothing is loaded"""
        assert get_config_or_default() == FactoryManConfig()

    def test_load_from_environment(self, monkeypatch):
        """Test environment variables are read with the FACTORYMAN_ prefix"""
        monkeypatch.setenv('FACTORYMAN_CREATE_METHOD', 'save')
        monkeypatch.setenv('FACTORYMAN_STRICT_FIELDS', 'false')
        monkeypatch.setenv('FACTORYMAN_LOG_LEVEL', 'DEBUG')
        monkeypatch.setenv('FACTORYMAN_ENV', 'ci')

        config = load_config()

        assert config.default_create_method == 'save'
        assert config.strict_fields is False
        assert config.log_level == 'debug'
        assert config.environment == Environment.CI
        assert get_config() is config

    def test_load_from_environment_defaults(self, monkeypatch):
        """Test defaults when no variables are set"""
        for key in ('CREATE_METHOD', 'STRICT_FIELDS', 'LOG_LEVEL', 'ENV'):
            monkeypatch.delenv(f'FACTORYMAN_{key}', raising=False)

        config = load_config()

        assert config == FactoryManConfig()

    def test_load_from_environment_invalid_env(self, monkeypatch):
        """Test unknown environments are rejected"""
        monkeypatch.setenv('FACTORYMAN_ENV', 'production')

        with pytest.raises(ConfigError, match="Invalid environment"):
            load_config()

    def test_load_from_dict(self):
        """Test loading from a dict converts environment strings"""
        config = load_config_from_dict({'default_create_method': 'save', 'environment': 'development'})

        assert config.default_create_method == 'save'
        assert config.is_development

    def test_load_from_dict_unknown_key(self):
        """Test unknown keys raise ConfigError"""
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            load_config_from_dict({'colour': 'red'})

    def test_load_from_yaml_section(self, tmp_path):
        """Test loading a factoryman section from YAML"""
        path = tmp_path / "config.yaml"
        path.write_text("factoryman:\n  default_create_method: save\n  strict_fields: false\n")

        config = load_config_from_yaml(str(path))

        assert config.default_create_method == 'save'
        assert config.strict_fields is False

    def test_load_from_yaml_root(self, tmp_path):
        """Test settings may sit at the YAML root"""
        path = tmp_path / "config.yaml"
        path.write_text("log_level: info\n")

        assert load_config_from_yaml(str(path)).log_level == 'info'

    def test_load_from_yaml_invalid_root(self, tmp_path):
        """Test non-mapping roots are rejected"""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a dictionary"):
            load_config_from_yaml(str(path))

    def test_load_from_yaml_syntax_error(self, tmp_path):
        """Test YAML syntax errors propagate"""
        path = tmp_path / "config.yaml"
        path.write_text("factoryman: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config_from_yaml(str(path))

    def test_override_config(self):
        """Test overrides apply to the loaded config and survive reloads"""
        load_config_from_dict({})

        override_config('default_create_method', 'persist')
        assert get_config().default_create_method == 'persist'

        load_config_from_dict({'default_create_method': 'save'})
        assert get_config().default_create_method == 'persist'

    def test_override_config_validates(self):
        """Test invalid overrides are rejected"""
        load_config_from_dict({})

        with pytest.raises(ConfigError):
            override_config('log_level', 'loud')

    def test_reset_config(self):
        """Test reset clears loaded config and overrides"""
        load_config_from_dict({})
        override_config('default_create_method', 'persist')

        reset_config()

        with pytest.raises(ConfigError):
            get_config()
        assert load_config_from_dict({}).default_create_method is None

    def test_to_dict(self):
        """Test to_dict serializes the environment enum"""
        factory = ConfigurationFactory()
        factory.load_from_dict({'default_create_method': 'save'})

        assert factory.to_dict() == {
            'default_create_method': 'save',
            'strict_fields': True,
            'log_level': 'warning',
            'environment': 'testing'
        }

    def test_configure_logging(self):
        """Test the library logger level follows the config"""
        library_logger = configure_logging(FactoryManConfig(log_level='debug'))

        assert library_logger.name == 'factoryman'
        assert library_logger.level == logging.DEBUG

        configure_logging(FactoryManConfig())
        assert library_logger.level == logging.WARNING
