"""
Go model generator module.

Generates Go structs with OVSDB column tags, plus the database model index,
from an OVSDB schema.
"""

from typing import Optional, TextIO

from ...core.generator import Generator
from .formatter import GoFormatter
from .generator import DatabaseModelGenerator, generate_package
from .templates import (
    DBMODEL_FILE,
    EXTRA_FIELDS,
    IDENTITY_COLUMN,
    POST_STRUCT,
    PRE_STRUCT,
    TABLE_HOOKS,
    NameConflictError,
    build_dbmodel_template,
    build_table_template,
    file_name,
    struct_tag,
)
from .types import ATOMIC_TYPES, UnrecognizedTypeError, atomic_type, field_type

__all__ = [
    "GoFormatter",
    "DatabaseModelGenerator",
    "generate_package",
    # Templates
    "build_table_template",
    "build_dbmodel_template",
    "file_name",
    "struct_tag",
    "PRE_STRUCT",
    "EXTRA_FIELDS",
    "POST_STRUCT",
    "TABLE_HOOKS",
    "IDENTITY_COLUMN",
    "DBMODEL_FILE",
    # Types
    "ATOMIC_TYPES",
    "atomic_type",
    "field_type",
    # Errors
    "NameConflictError",
    "UnrecognizedTypeError",
    # Factory functions
    "new_generator",
]


def new_generator(dry_run: bool = False, stream: Optional[TextIO] = None) -> Generator:
    """
    Create a generator that validates and formats Go code.

    Args:
        dry_run: Print generated code instead of writing files
        stream: Output for dry runs (default: stdout)

    Returns:
        Generator using the Go formatter
    """
    return Generator(GoFormatter(), dry_run=dry_run, stream=stream)
