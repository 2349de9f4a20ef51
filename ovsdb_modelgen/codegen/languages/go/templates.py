"""
Go model templates.

Builds the per-table struct template and the database model index
template. Every call returns a fresh ModelTemplate and TemplateContext,
so templates built for different tables share no state.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ...core.generator import GeneratorError
from ...core.naming import NameNormalizer
from ...core.schema import DatabaseSchema, TableSchema
from ...core.templates import FieldSpec, ModelTemplate, TemplateContext
from ....logging_config import get_logger
from .types import field_type

logger = get_logger(__name__)


# Hook names of the table template
PRE_STRUCT = "pre_struct_definitions"
EXTRA_FIELDS = "extra_fields"
POST_STRUCT = "post_struct_definitions"
TABLE_HOOKS = (PRE_STRUCT, EXTRA_FIELDS, POST_STRUCT)

# Every row carries its identifier in the _uuid column
IDENTITY_COLUMN = "_uuid"
IDENTITY_FIELD = "UUID"

DEFAULT_TAG_KEY = "ovs"
DEFAULT_MODEL_IMPORT = "github.com/ovn-org/libovsdb/model"
DBMODEL_FILE = "model.go"

HEADER = """\
// Code generated by "ovsdb_modelgen"
// DO NOT EDIT.
"""

TABLE_TEMPLATE = (
    HEADER
    + """
package {{ package_name }}
{% include "pre_struct_definitions" %}

// {{ struct_name }} defines an object in {{ table_name }} table
type {{ struct_name }} struct {
{% for field in fields %}
    {{ field.name }} {{ field.type }} `{{ field.tag | struct_tag(tag_key) }}`
{% endfor %}

{% include "extra_fields" %}
}
{% include "post_struct_definitions" %}
"""
)

DBMODEL_TEMPLATE = (
    HEADER
    + """
package {{ package_name }}

import (
    model "{{ model_import }}"
)

// FullDatabaseModel returns the DatabaseModel object to be used in libovsdb
func FullDatabaseModel() (*model.DBModel, error) {
{% if tables %}
    return model.NewDBModel("{{ database_name }}", map[string]model.Model{
{% for table in tables %}
        "{{ table.name }}": &{{ table.struct_name }}{},
{% endfor %}
    })
{% else %}
    return model.NewDBModel("{{ database_name }}", map[string]model.Model{})
{% endif %}
}
"""
)


class NameConflictError(GeneratorError):
    """Raised when two schema names normalize to the same identifier."""

    def __init__(self, name: str, sources: Iterable[str], scope: str = ""):
        self.name = name
        self.sources = tuple(sources)
        where = f" in {scope}" if scope else ""
        super().__init__(
            f"Names {', '.join(repr(s) for s in self.sources)}{where} "
            f"all normalize to {name!r}"
        )


@dataclass(frozen=True)
class ModelEntry:
    """One table registered in the database model."""

    name: str
    struct_name: str


def struct_tag(column: str, key: str = DEFAULT_TAG_KEY) -> str:
    """Struct tag carrying the raw column name (``ovs:"Foo_Bar"``)."""
    return f'{key}:"{column}"'


def file_name(table_name: str) -> str:
    """Go file of a table (``Logical_Switch`` -> ``logical_switch.go``)."""
    return f"{table_name.lower()}.go"


def table_fields(
    table_name: str, table: TableSchema, normalizer: Optional[NameNormalizer] = None
) -> Tuple[FieldSpec, ...]:
    """
    Build the struct fields of a table.

    The identity field comes first; the other fields are sorted by name so
    the column order of the schema never shows in the output.

    Raises:
        NameConflictError: If two columns normalize to the same field name
        UnrecognizedTypeError: If a column type has no Go mapping
    """
    normalizer = normalizer or NameNormalizer()
    sources: Dict[str, str] = {IDENTITY_FIELD: IDENTITY_COLUMN}
    fields = []

    for column_name, column in table.columns.items():
        if column_name == IDENTITY_COLUMN:
            continue

        name = normalizer.normalize(column_name)
        if not name.isidentifier():
            raise GeneratorError(
                f"Column {table_name}.{column_name!r} has no usable field name"
                f" (got {name!r})"
            )
        if name in sources:
            raise NameConflictError(name, (sources[name], column_name), table_name)
        sources[name] = column_name

        fields.append(
            FieldSpec(name, field_type(column, table_name, column_name), column_name)
        )

    fields.sort(key=lambda f: f.name)
    return (FieldSpec(IDENTITY_FIELD, "string", IDENTITY_COLUMN), *fields)


def build_table_template(
    package_name: str,
    table_name: str,
    table: TableSchema,
    struct_name: Optional[str] = None,
    tag_key: str = DEFAULT_TAG_KEY,
    normalizer: Optional[NameNormalizer] = None,
) -> Tuple[ModelTemplate, TemplateContext]:
    """
    Build the struct template of one table.

    Args:
        package_name: Go package of the generated file
        table_name: Table name as written in the schema
        table: Table schema
        struct_name: Struct name, used verbatim (default: normalized table name)
        tag_key: Struct tag key
        normalizer: Name normalizer (default: built-in acronyms only)

    Returns:
        Fresh (template, context) pair; hooks are empty

    Raises:
        NameConflictError: If two columns normalize to the same field name
        UnrecognizedTypeError: If a column type has no Go mapping
    """
    normalizer = normalizer or NameNormalizer()
    name = struct_name or normalizer.normalize(table_name)
    if not name.isidentifier():
        raise GeneratorError(f"Table {table_name!r} has no usable struct name")

    fields = table_fields(table_name, table, normalizer)
    logger.debug(
        "Built template for table %s: struct %s with %d fields",
        table_name,
        name,
        len(fields),
    )

    template = ModelTemplate(
        "table", TABLE_TEMPLATE, TABLE_HOOKS, filters={"struct_tag": struct_tag}
    )
    context = TemplateContext(
        package_name=package_name,
        table_name=table_name,
        struct_name=name,
        fields=fields,
        tag_key=tag_key,
    )
    return template, context


def build_dbmodel_template(
    package_name: str,
    schema: DatabaseSchema,
    normalizer: Optional[NameNormalizer] = None,
    model_import: str = DEFAULT_MODEL_IMPORT,
) -> Tuple[ModelTemplate, TemplateContext]:
    """
    Build the database model template listing every table's struct.

    Raises:
        NameConflictError: If two tables normalize to the same struct name
    """
    normalizer = normalizer or NameNormalizer()
    sources: Dict[str, str] = {}
    tables = []

    for table_name in sorted(schema.tables):
        name = normalizer.normalize(table_name)
        if name in sources:
            raise NameConflictError(name, (sources[name], table_name), schema.name)
        sources[name] = table_name
        tables.append(ModelEntry(table_name, name))

    template = ModelTemplate("dbmodel", DBMODEL_TEMPLATE)
    context = TemplateContext(
        package_name=package_name,
        database_name=schema.name,
        model_import=model_import,
        tables=tuple(tables),
    )
    return template, context
