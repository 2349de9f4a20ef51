"""Generate Go data models from OVSDB database schemas."""

from .codegen import (
    DatabaseModelGenerator,
    DatabaseSchema,
    GenerationResult,
    ModelGenConfig,
    build_table_template,
    generate_from_dict,
    generate_package,
    load_config,
    new_generator,
)

__version__ = "0.1.0"

__all__ = [
    "DatabaseModelGenerator",
    "DatabaseSchema",
    "GenerationResult",
    "ModelGenConfig",
    "build_table_template",
    "generate_from_dict",
    "generate_package",
    "load_config",
    "new_generator",
    "__version__",
]
