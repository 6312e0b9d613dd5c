"""Transformer plugin loader.

This module loads user-provided Python files that register transformers.
It validates a register_transformers(registry) callable contract.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

from core.constants import TRANSFORMER_PLUGIN_FUNCTION, TRANSFORMER_PLUGIN_MODULE_NAME
from core.errors import IntakeTransformerError
from core.logging_config import get_logger
from convert.transformer_registry import TransformerRegistry

_LOGGER = get_logger(__name__)


def build_transformer_registry(plugin_path: Path | str | None) -> TransformerRegistry:
    """Build a registry, populated from a plugin file when provided.

    Args:
        plugin_path: Optional path to a Python transformer plugin file.

    Returns:
        Transformer registry, empty when no plugin is given.

    Raises:
        IntakeTransformerError: If path is invalid or the callable is missing.
    """
    registry = TransformerRegistry()
    if plugin_path is None:
        return registry
    resolved_path = Path(plugin_path).expanduser().resolve()
    if not resolved_path.exists():
        raise IntakeTransformerError(
            f"Transformer plugin not found at {resolved_path}. "
            "Provide a valid --transformers path."
        )
    module = _load_python_module(resolved_path)
    register_fn = getattr(module, TRANSFORMER_PLUGIN_FUNCTION, None)
    if register_fn is None or not callable(register_fn):
        raise IntakeTransformerError(
            f"Invalid transformer plugin at {resolved_path}: "
            f"missing callable {TRANSFORMER_PLUGIN_FUNCTION}(registry)."
        )
    register_fn(registry)
    _LOGGER.info(
        "transformers_loaded",
        plugin_path=str(resolved_path),
        formats=list(registry.formats()),
    )
    return registry


def _load_python_module(module_path: Path) -> Any:
    """Load Python module from file path."""
    spec = importlib.util.spec_from_file_location(
        TRANSFORMER_PLUGIN_MODULE_NAME, str(module_path)
    )
    if spec is None or spec.loader is None:
        raise IntakeTransformerError(
            f"Failed to load transformer plugin at {module_path}. "
            "Verify the file path and syntax."
        )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
