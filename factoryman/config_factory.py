"""
Configuration Factory - Centralized configuration management for FactoryMan
Provides type-safe configuration with validation and environment-specific settings.
"""

import os
import logging
from typing import Any, Dict, Optional, Type
from enum import Enum
from dataclasses import dataclass

import yaml


class Environment(Enum):
    """Environment types for configuration"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"


class ConfigError(Exception):
    """Configuration-related errors"""
    pass


VALID_LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


@dataclass
class FactoryManConfig:
    """Library configuration with type safety and validation"""

    # Creation settings
    default_create_method: Optional[str] = None  # process-wide default create method name

    # Materialization settings
    strict_fields: bool = True  # unknown property names raise instead of being attached

    # Logging
    log_level: str = 'warning'

    # Environment
    environment: Environment = Environment.TESTING

    def __post_init__(self):
        """Validate configuration after initialization"""
        self._validate()

    def _validate(self):
        """Validate configuration values"""
        if self.default_create_method is not None:
            if not isinstance(self.default_create_method, str) or not self.default_create_method.isidentifier():
                raise ConfigError(f"Invalid default_create_method: {self.default_create_method!r}")

        if not isinstance(self.strict_fields, bool):
            raise ConfigError(f"Invalid strict_fields: {self.strict_fields!r}")

        if str(self.log_level).lower() not in VALID_LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {self.log_level}")

        if not isinstance(self.environment, Environment):
            raise ConfigError(f"Invalid environment: {self.environment!r}")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode"""
        return self.environment == Environment.TESTING


class ConfigurationFactory:
    """
    Factory for creating and managing library configuration.

    Features:
    - Environment variable loading with type conversion
    - YAML file loading
    - Configuration validation
    - Singleton pattern for global config access
    """

    _instance: Optional['ConfigurationFactory'] = None
    _config: Optional[FactoryManConfig] = None

    def __new__(cls) -> 'ConfigurationFactory':
        """Singleton pattern implementation"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the configuration factory"""
        if not hasattr(self, '_initialized'):
            self._logger = logging.getLogger(__name__)
            self._env_overrides: Dict[str, Any] = {}
            self._initialized = True

    def load_from_environment(self, env_prefix: str = 'FACTORYMAN_') -> FactoryManConfig:
        """
        Load configuration from environment variables.

        Args:
            env_prefix: Prefix for environment variables

        Returns:
            Configured FactoryManConfig instance
        """
        def get_env_var(key: str, default: Any = None, var_type: Type = str) -> Any:
            """Get environment variable with type conversion"""
            env_key = f"{env_prefix}{key}" if env_prefix else key
            value = os.environ.get(env_key)

            if value is None:
                return default

            if var_type == bool:
                return value.lower() in ('true', '1', 'yes', 'on')
            return value

        env_name = get_env_var('ENV', Environment.TESTING.value)
        try:
            environment = Environment(env_name.lower())
        except ValueError:
            raise ConfigError(f"Invalid environment: {env_name}")

        config = FactoryManConfig(
            default_create_method=get_env_var('CREATE_METHOD') or None,
            strict_fields=get_env_var('STRICT_FIELDS', True, bool),
            log_level=get_env_var('LOG_LEVEL', 'warning').lower(),
            environment=environment
        )

        self._apply_overrides(config)

        self._config = config
        self._logger.info(f"Configuration loaded for environment: {environment.value}")
        return config

    def load_from_dict(self, config_dict: Dict[str, Any]) -> FactoryManConfig:
        """
        Load configuration from dictionary (useful for testing).

        Args:
            config_dict: Dictionary of configuration values

        Returns:
            Configured FactoryManConfig instance
        """
        config_dict = dict(config_dict)

        # Convert environment string to enum if provided
        if 'environment' in config_dict and isinstance(config_dict['environment'], str):
            try:
                config_dict['environment'] = Environment(config_dict['environment'])
            except ValueError:
                raise ConfigError(f"Invalid environment: {config_dict['environment']}")

        try:
            config = FactoryManConfig(**config_dict)
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}")

        self._apply_overrides(config)
        self._config = config
        return self._config

    def load_from_yaml(self, yaml_file_path: str) -> FactoryManConfig:
        """
        Load configuration from a YAML file.

        The file may hold settings at its root or under a ``factoryman:`` key.

        Args:
            yaml_file_path: Path to the YAML file

        Returns:
            Configured FactoryManConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigError: If the YAML root is not a mapping
            yaml.YAMLError: If YAML parsing fails
        """
        with open(yaml_file_path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("YAML configuration root must be a dictionary")

        section = data.get('factoryman', data)
        if not isinstance(section, dict):
            raise ConfigError("'factoryman' section must be a dictionary")

        config = self.load_from_dict(section)
        self._logger.info(f"Configuration loaded from {yaml_file_path}")
        return config

    def override_setting(self, key: str, value: Any) -> 'ConfigurationFactory':
        """
        Override a specific configuration setting.

        Args:
            key: Configuration key to override
            value: New value for the setting

        Returns:
            Self for method chaining
        """
        self._env_overrides[key] = value

        # Update current config if loaded
        if self._config and hasattr(self._config, key):
            setattr(self._config, key, value)
            self._config._validate()  # Re-validate after change

        return self

    def _apply_overrides(self, config: FactoryManConfig) -> None:
        for key, value in self._env_overrides.items():
            if hasattr(config, key):
                setattr(config, key, value)
        config._validate()

    def get_config(self) -> FactoryManConfig:
        """
        Get the current configuration.

        Returns:
            Current FactoryManConfig instance

        Raises:
            ConfigError: If no configuration has been loaded
        """
        if self._config is None:
            raise ConfigError("Configuration not loaded. Call load_from_environment() or load_from_dict() first.")
        return self._config

    def is_loaded(self) -> bool:
        return self._config is not None

    def reset(self) -> 'ConfigurationFactory':
        """Reset the factory (useful for testing)"""
        self._config = None
        self._env_overrides.clear()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert current configuration to dictionary"""
        if self._config is None:
            raise ConfigError("Configuration not loaded")

        config_dict = {}
        for field_info in self._config.__dataclass_fields__.values():
            value = getattr(self._config, field_info.name)
            if isinstance(value, Environment):
                config_dict[field_info.name] = value.value
            else:
                config_dict[field_info.name] = value

        return config_dict


# Global factory instance
_config_factory = ConfigurationFactory()


def get_config() -> FactoryManConfig:
    """Get the global library configuration"""
    return _config_factory.get_config()


def get_config_or_default() -> FactoryManConfig:
    """Get the global configuration, falling back to defaults when none is loaded"""
    if _config_factory.is_loaded():
        return _config_factory.get_config()
    return FactoryManConfig()


def load_config(env_prefix: str = 'FACTORYMAN_') -> FactoryManConfig:
    """Load configuration from environment variables"""
    return _config_factory.load_from_environment(env_prefix)


def load_config_from_dict(config_dict: Dict[str, Any]) -> FactoryManConfig:
    """Load configuration from dictionary"""
    return _config_factory.load_from_dict(config_dict)


def load_config_from_yaml(yaml_file_path: str) -> FactoryManConfig:
    """Load configuration from a YAML file"""
    return _config_factory.load_from_yaml(yaml_file_path)


def override_config(key: str, value: Any) -> ConfigurationFactory:
    """Override a configuration setting"""
    return _config_factory.override_setting(key, value)


def reset_config() -> ConfigurationFactory:
    """Reset configuration (for testing)"""
    return _config_factory.reset()


def configure_logging(config: Optional[FactoryManConfig] = None) -> logging.Logger:
    """Apply the configured log level to the library's root logger"""
    config = config or get_config_or_default()
    library_logger = logging.getLogger('factoryman')
    library_logger.setLevel(getattr(logging, config.log_level.upper()))
    return library_logger
