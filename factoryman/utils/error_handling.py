"""
Error Handling Utilities

Provides common logging helpers used by factories, the registry and the
definitions loader.
"""

import logging
from typing import Dict, Any, Optional

from factoryman.core.errors import FactoryError

logger = logging.getLogger('factoryman')


def log_factory_error(factory_name: str, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log factory errors with consistent formatting.

    Args:
        factory_name: Name of the factory where the error occurred
        error: Exception that occurred
        context: Optional context information
    """
    context_str = f" Context: {context}" if context else ""
    code_str = f"[{error.code.value}] " if isinstance(error, FactoryError) and error.code else ""
    logger.error(f"Error in {factory_name}: {code_str}{type(error).__name__}: {str(error)}{context_str}")


def log_factory_action(factory_name: str, action: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log factory actions with consistent formatting.

    Args:
        factory_name: Name of the factory
        action: Action being performed
        context: Optional context information
    """
    context_str = f" Context: {context}" if context else ""
    logger.debug(f"{factory_name}: {action}{context_str}")
