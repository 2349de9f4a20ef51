"""
Core code generation components.

Provides the schema model, naming, templates, configuration and the
generator used by all language generators.
"""

from .generator import (
    FormatError,
    GenerationResult,
    Generator,
    GeneratorError,
    PersistError,
    SourceFormatter,
)
from .schema import (
    AtomicType,
    BaseType,
    ColumnSchema,
    ColumnType,
    DatabaseSchema,
    SchemaError,
    TableSchema,
)
from .naming import (
    ACRONYMS,
    PLURAL_ACRONYMS,
    NameNormalizer,
    camel_case,
    field_name,
    struct_name,
)
from .config import ConfigError, ConfigManager, ModelGenConfig, load_config
from .templates import (
    FieldSpec,
    HookParseError,
    ModelTemplate,
    RenderError,
    TemplateContext,
    TemplateError,
)

__all__ = [
    # Generator
    "Generator",
    "GeneratorError",
    "GenerationResult",
    "FormatError",
    "PersistError",
    "SourceFormatter",
    # Schema model
    "AtomicType",
    "BaseType",
    "ColumnSchema",
    "ColumnType",
    "DatabaseSchema",
    "SchemaError",
    "TableSchema",
    # Naming
    "ACRONYMS",
    "PLURAL_ACRONYMS",
    "NameNormalizer",
    "camel_case",
    "field_name",
    "struct_name",
    # Configuration
    "ModelGenConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "FieldSpec",
    "ModelTemplate",
    "TemplateContext",
    "TemplateError",
    "HookParseError",
    "RenderError",
]
