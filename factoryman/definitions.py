"""
Definition Loader for FactoryMan

Handles loading and validation of YAML files declaring factories:

    factories:
      - name: Dog
        target: myapp.models:Dog
        create_method: save
        properties:
          breed: Golden Retriever
        sequences:
          name: "Rover #{n}"
"""

import importlib
import logging
from string import Formatter
from typing import Any, Dict, List, Optional

import yaml

from factoryman.container.factory_registry import FactoryRegistry, get_registry
from factoryman.core.errors import DefinitionValidationError
from factoryman.factory import Factory
from factoryman.sequence import Sequence
from factoryman.utils.error_handling import log_factory_error

logger = logging.getLogger(__name__)

ALLOWED_KEYS = {'name', 'target', 'create_method', 'properties', 'sequences'}


def resolve_target(path: str) -> type:
    """
    Import a class from a 'package.module:ClassName' path.

    Raises:
        DefinitionValidationError: If the module or class cannot be found
    """
    module_name, _, attr_path = path.partition(':')
    if not module_name or not attr_path:
        raise DefinitionValidationError(
            f"Target '{path}' must look like 'package.module:ClassName'", {"target": path}
        )

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise DefinitionValidationError(f"Cannot import module '{module_name}': {e}", {"target": path}) from e

    for attr in attr_path.split('.'):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise DefinitionValidationError(f"Cannot resolve '{attr_path}' in '{module_name}'", {"target": path}) from e

    if not isinstance(target, type):
        raise DefinitionValidationError(f"Target '{path}' is not a class", {"target": path})

    return target


def sequence_property(template: str) -> Any:
    """Function property producing template.format(n=...) from its own sequence."""
    sequence = Sequence(lambda n: template.format(n=n))
    return lambda instance: sequence.next()


class DefinitionLoader:
    """Loads factory definitions from a YAML file into a registry."""

    def __init__(self, yaml_file_path: str, registry: Optional[FactoryRegistry] = None):
        """
        Initialize DefinitionLoader with path to YAML file.

        Args:
            yaml_file_path: Path to the YAML file declaring factories
            registry: Registry to register factories in, the global one if omitted
        """
        self.yaml_file_path = yaml_file_path
        self.registry = registry if registry is not None else get_registry()
        self.factories: List[Factory] = []
        self._loaded = False

    def load_definitions_from_yaml(self) -> List[Factory]:
        """
        Load, validate and register factories from the YAML file.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            DefinitionValidationError: If YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        try:
            with open(self.yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)

            self.validate_yaml_structure(data)
            self.factories = self._parse_factories(data)
        except FileNotFoundError:
            logger.error(f"YAML file not found: {self.yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            raise
        except DefinitionValidationError as e:
            log_factory_error("DefinitionLoader", e, {"file": self.yaml_file_path})
            raise

        for factory in self.factories:
            self.registry.register(factory)

        self._loaded = True
        logger.info(f"Successfully loaded {len(self.factories)} factories from {self.yaml_file_path}")
        return self.factories

    def validate_yaml_structure(self, data: Any) -> None:
        """
        Validate the structure of loaded YAML data.

        Raises:
            DefinitionValidationError: If structure is invalid
        """
        if not isinstance(data, dict):
            raise DefinitionValidationError("YAML root must be a dictionary")

        if 'factories' not in data:
            raise DefinitionValidationError("YAML must contain 'factories' key")

        factories = data['factories']
        if not isinstance(factories, list):
            raise DefinitionValidationError("'factories' must be a list")

        for i, item in enumerate(factories):
            if not isinstance(item, dict):
                raise DefinitionValidationError(f"Factory item {i} must be a dictionary", {"index": i})

            unknown = set(item) - ALLOWED_KEYS
            if unknown:
                raise DefinitionValidationError(
                    f"Factory item {i} has unknown keys: {sorted(unknown)}", {"index": i}
                )

            if not isinstance(item.get('target'), str) or not item['target'].strip():
                raise DefinitionValidationError(
                    f"Factory item {i} requires a non-empty 'target'", {"index": i}
                )

            for field in ('name', 'create_method'):
                if field in item and (not isinstance(item[field], str) or not item[field].strip()):
                    raise DefinitionValidationError(
                        f"Factory item {i} field '{field}' must be a non-empty string", {"index": i}
                    )

            for section in ('properties', 'sequences'):
                if item.get(section) is not None and not isinstance(item[section], dict):
                    raise DefinitionValidationError(
                        f"Factory item {i} '{section}' must be a dictionary", {"index": i}
                    )

            for field, template in (item.get('sequences') or {}).items():
                self._validate_sequence_template(i, field, template)

            overlap = set(item.get('properties') or {}) & set(item.get('sequences') or {})
            if overlap:
                raise DefinitionValidationError(
                    f"Factory item {i} declares {sorted(overlap)} as both property and sequence",
                    {"index": i}
                )

        names = [item.get('name') or item['target'].rpartition(':')[2].rpartition('.')[2] for item in factories]
        if len(names) != len(set(names)):
            raise DefinitionValidationError("Duplicate factory names found")

    @staticmethod
    def _validate_sequence_template(index: int, field: str, template: Any) -> None:
        details = {"index": index, "property": field}
        if not isinstance(template, str):
            raise DefinitionValidationError(
                f"Factory item {index} sequence '{field}' must be a string containing '{{n}}'", details
            )

        try:
            fields = {name for _, name, _, _ in Formatter().parse(template) if name is not None}
            template.format(n=0)
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise DefinitionValidationError(
                f"Factory item {index} sequence '{field}' has an invalid template: {e!r}", details
            ) from e

        if 'n' not in fields:
            raise DefinitionValidationError(
                f"Factory item {index} sequence '{field}' must be a string containing '{{n}}'", details
            )

    def _parse_factories(self, data: Dict[str, Any]) -> List[Factory]:
        factories = []
        for item in data['factories']:
            factory = Factory(
                resolve_target(item['target'].strip()),
                item.get('properties') or {},
                name=item.get('name'),
                registry=self.registry
            )
            for field, template in (item.get('sequences') or {}).items():
                factory.add_function(field, sequence_property(template))
            if item.get('create_method'):
                factory.set_create_method(item['create_method'].strip())
            factories.append(factory)
        return factories

    def get_factory(self, name: str) -> Factory:
        """
        Get a loaded factory by name.

        Raises:
            RuntimeError: If definitions haven't been loaded
            FactoryNotRegisteredError: If no factory has that name
        """
        if not self._loaded:
            raise RuntimeError("No factory definitions loaded")
        return self.registry.get(name)

    def is_loaded(self) -> bool:
        return self._loaded
