"""
Global pytest configuration and fixtures.
Resets process-wide factory state so tests stay independent.
"""

import pytest


@pytest.fixture(scope="function", autouse=True)
def reset_global_state():
    """Reset configuration, registry defaults and shared sequences before each test."""
    from factoryman.config_factory import reset_config
    from factoryman.container.factory_registry import reset_registry
    from tests.factories import reset_sequences

    reset_config()
    reset_registry()
    reset_sequences()

    yield


@pytest.fixture(scope="function")
def registry():
    """Provide an isolated FactoryRegistry."""
    from factoryman.container.factory_registry import FactoryRegistry
    return FactoryRegistry()


@pytest.fixture(scope="function")
def definitions_file(tmp_path):
    """Write a YAML definitions file and return its path."""
    def _write(content: str):
        path = tmp_path / "factories.yaml"
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
