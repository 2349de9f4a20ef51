"""
Go-specific type mapping.

Maps OVSDB column types to Go type expressions: atomic types to Go
primitives, optional columns to pointers, sets to slices and maps to
Go maps.
"""

from typing import Dict

from ...core.generator import GeneratorError
from ...core.schema import AtomicType, BaseType, ColumnSchema


ATOMIC_TYPES: Dict[str, str] = {
    AtomicType.INTEGER.value: "int",
    AtomicType.REAL.value: "float64",
    AtomicType.BOOLEAN.value: "bool",
    AtomicType.STRING.value: "string",
    # Row references are opaque string handles
    AtomicType.UUID.value: "string",
}


class UnrecognizedTypeError(GeneratorError):
    """Raised when a column uses a wire type with no Go mapping."""

    def __init__(self, token: str, table_name: str = "", column_name: str = ""):
        self.token = token
        self.table_name = table_name
        self.column_name = column_name
        location = ".".join(part for part in (table_name, column_name) if part)
        super().__init__(
            f"Unrecognized type {token!r} in column {location or '<unknown>'}"
        )


def atomic_type(type_name: str) -> str:
    """
    Map an atomic wire type name to a Go type.

    Returns:
        Go type name, or "" for unknown wire types
    """
    return ATOMIC_TYPES.get(type_name, "")


def field_type(
    column: ColumnSchema, table_name: str = "", column_name: str = ""
) -> str:
    """
    Map a column to the Go type of its struct field.

    Args:
        column: Column to map
        table_name: Table name, used in error messages
        column_name: Column name, used in error messages

    Returns:
        Go type expression (``int``, ``*string``, ``[]string``,
        ``map[string]int``...)

    Raises:
        UnrecognizedTypeError: If a key or value type has no mapping
    """
    column_type = column.type
    key_type = _element_type(column_type.key, table_name, column_name)

    if column_type.is_map:
        value_type = _element_type(column_type.value, table_name, column_name)
        return f"map[{key_type}]{value_type}"

    if column_type.is_set:
        return f"[]{key_type}"

    if column_type.is_optional:
        return f"*{key_type}"

    return key_type


def _element_type(base: BaseType, table_name: str, column_name: str) -> str:
    go_type = atomic_type(base.type)
    if not go_type:
        raise UnrecognizedTypeError(base.type, table_name, column_name)
    return go_type
