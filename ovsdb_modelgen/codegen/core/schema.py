"""
Core schema representation for code generation.

Holds the read-only OVSDB database schema model that generators work
with: database name and version, tables, and per-column type descriptors.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union, Any, Tuple
from enum import Enum


UNLIMITED = "unlimited"


class SchemaError(ValueError):
    """Exception raised when a schema document has an invalid shape."""

    pass


class AtomicType(str, Enum):
    """OVSDB atomic wire types."""

    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"
    STRING = "string"
    UUID = "uuid"


@dataclass(frozen=True)
class BaseType:
    """The type of a column key or value."""

    type: str
    enum: Optional[Tuple[Any, ...]] = None
    ref_table: Optional[str] = None
    ref_type: Optional[str] = None


@dataclass(frozen=True)
class ColumnType:
    """
    Complete type of a column.

    A plain atomic column has no value type and min == max == 1. Other
    combinations describe optional, set or map valued columns.
    """

    key: BaseType
    value: Optional[BaseType] = None
    min: int = 1
    max: Union[int, str] = 1

    @property
    def is_map(self) -> bool:
        return self.value is not None

    @property
    def is_optional(self) -> bool:
        return self.value is None and self.min == 0 and self.max == 1

    @property
    def is_set(self) -> bool:
        if self.value is not None:
            return False
        return self.max == UNLIMITED or (isinstance(self.max, int) and self.max > 1)

    @property
    def is_atomic(self) -> bool:
        return not (self.is_map or self.is_optional or self.is_set)


@dataclass(frozen=True)
class ColumnSchema:
    """Represents a single column in a table."""

    type: ColumnType
    ephemeral: bool = False
    mutable: bool = True


@dataclass
class TableSchema:
    """Represents the columns of a table."""

    columns: Dict[str, ColumnSchema] = field(default_factory=dict)
    max_rows: Optional[int] = None
    is_root: bool = False
    indexes: List[List[str]] = field(default_factory=list)

    def column(self, name: str) -> Optional[ColumnSchema]:
        """Get column by name."""
        return self.columns.get(name)


@dataclass
class DatabaseSchema:
    """Represents a whole OVSDB database schema."""

    name: str
    version: str
    tables: Dict[str, TableSchema] = field(default_factory=dict)
    cksum: Optional[str] = None

    def table(self, name: str) -> Optional[TableSchema]:
        """Get table by name."""
        return self.tables.get(name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatabaseSchema":
        """
        Build the schema model from a decoded OVSDB schema document.

        Atomic type names are kept as given, so unknown wire types survive
        until the type mapper reports them.

        Args:
            data: Decoded JSON object with name, version and tables

        Returns:
            DatabaseSchema instance

        Raises:
            SchemaError: If the document does not have the expected shape
        """
        if not isinstance(data, dict):
            raise SchemaError("Schema must be a JSON object")

        for key in ("name", "version", "tables"):
            if key not in data:
                raise SchemaError(f"Schema is missing required member '{key}'")

        raw_tables = data["tables"]
        if not isinstance(raw_tables, dict):
            raise SchemaError("Schema member 'tables' must be an object")

        tables = {
            table_name: _parse_table(table_name, table_data)
            for table_name, table_data in raw_tables.items()
        }

        return cls(
            name=data["name"],
            version=data["version"],
            tables=tables,
            cksum=data.get("cksum"),
        )


def _parse_table(table_name: str, data: Any) -> TableSchema:
    if not isinstance(data, dict) or not isinstance(data.get("columns"), dict):
        raise SchemaError(f"Table '{table_name}' must have a 'columns' object")

    columns = {}
    for column_name, column_data in data["columns"].items():
        if not isinstance(column_data, dict) or "type" not in column_data:
            raise SchemaError(
                f"Column '{table_name}.{column_name}' must have a 'type' member"
            )
        columns[column_name] = ColumnSchema(
            type=_parse_column_type(table_name, column_name, column_data["type"]),
            ephemeral=column_data.get("ephemeral", False),
            mutable=column_data.get("mutable", True),
        )

    return TableSchema(
        columns=columns,
        max_rows=data.get("maxRows"),
        is_root=data.get("isRoot", False),
        indexes=data.get("indexes", []),
    )


def _parse_column_type(table_name: str, column_name: str, data: Any) -> ColumnType:
    # <atomic-type> shorthand
    if isinstance(data, str):
        return ColumnType(key=BaseType(type=data))

    if not isinstance(data, dict) or "key" not in data:
        raise SchemaError(
            f"Column '{table_name}.{column_name}' has an invalid type: {data!r}"
        )

    value = data.get("value")
    max_value = data.get("max", 1)
    if not (max_value == UNLIMITED or isinstance(max_value, int)):
        raise SchemaError(
            f"Column '{table_name}.{column_name}' has an invalid max: {max_value!r}"
        )

    return ColumnType(
        key=_parse_base_type(table_name, column_name, data["key"]),
        value=_parse_base_type(table_name, column_name, value) if value else None,
        min=data.get("min", 1),
        max=max_value,
    )


def _parse_base_type(table_name: str, column_name: str, data: Any) -> BaseType:
    if isinstance(data, str):
        return BaseType(type=data)

    if not isinstance(data, dict) or "type" not in data:
        raise SchemaError(
            f"Column '{table_name}.{column_name}' has an invalid base type: {data!r}"
        )

    return BaseType(
        type=data["type"],
        enum=_parse_enum(data.get("enum")),
        ref_table=data.get("refTable"),
        ref_type=data.get("refType"),
    )


def _parse_enum(data: Any) -> Optional[Tuple[Any, ...]]:
    """Enums are either a single atom or ["set", [atoms...]]."""
    if data is None:
        return None
    if isinstance(data, list) and len(data) == 2 and data[0] == "set":
        return tuple(data[1])
    return (data,)
