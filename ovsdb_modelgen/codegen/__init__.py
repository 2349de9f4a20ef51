"""
OVSDB model code generation.

Generates typed model source code from OVSDB database schemas.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path

from .core.config import ModelGenConfig, ConfigManager, load_config
from .core.generator import Generator, GenerationResult
from .core.schema import DatabaseSchema
from .core.templates import ModelTemplate, TemplateContext
from .languages.go import (
    DatabaseModelGenerator,
    build_dbmodel_template,
    build_table_template,
    generate_package,
    new_generator,
)

__all__ = [
    "ModelGenConfig",
    "ConfigManager",
    "load_config",
    "Generator",
    "GenerationResult",
    "DatabaseSchema",
    "ModelTemplate",
    "TemplateContext",
    "DatabaseModelGenerator",
    "build_table_template",
    "build_dbmodel_template",
    "generate_package",
    "new_generator",
    "generate_from_dict",
]


def generate_from_dict(
    schema_data: Dict[str, Any],
    config: Optional[Union[Dict[str, Any], ModelGenConfig]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationResult:
    """
    Generate a model package from a decoded OVSDB schema.

    Args:
        schema_data: Decoded schema JSON
        config: Configuration overrides or a complete configuration
        config_file: JSON configuration file

    Returns:
        GenerationResult with the generated files
    """
    if not isinstance(config, ModelGenConfig):
        config = load_config(config, config_file)

    try:
        schema = DatabaseSchema.from_dict(schema_data)
    except ValueError as e:
        return GenerationResult.error(f"Invalid schema: {e}", exception=e)

    return generate_package(schema, config)
