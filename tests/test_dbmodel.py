"""
tests/test_dbmodel.py
---------------------
Whole-database generation: the model index and per-table files.
"""

import io

import pytest

from ovsdb_modelgen.codegen.core.config import ModelGenConfig
from ovsdb_modelgen.codegen.core.schema import DatabaseSchema
from ovsdb_modelgen.codegen.languages.go import (
    DBMODEL_FILE,
    POST_STRUCT,
    DatabaseModelGenerator,
    NameConflictError,
    build_dbmodel_template,
    generate_package,
    new_generator,
)
from ovsdb_modelgen.codegen.languages.go.types import UnrecognizedTypeError

EXPECTED_DBMODEL = (
    '// Code generated by "ovsdb_modelgen"\n'
    "// DO NOT EDIT.\n"
    "\n"
    "package ovsmodel\n"
    "\n"
    "import (\n"
    '\tmodel "github.com/ovn-org/libovsdb/model"\n'
    ")\n"
    "\n"
    "// FullDatabaseModel returns the DatabaseModel object to be used in libovsdb\n"
    "func FullDatabaseModel() (*model.DBModel, error) {\n"
    '\treturn model.NewDBModel("OVN_Northbound", map[string]model.Model{\n'
    '\t\t"ACL":                 &ACL{},\n'
    '\t\t"Logical_Switch":      &LogicalSwitch{},\n'
    '\t\t"Logical_Switch_Port": &LogicalSwitchPort{},\n'
    "\t})\n"
    "}\n"
)


def _schema(tables):
    return DatabaseSchema.from_dict(
        {"name": "DB", "version": "1.0.0", "tables": tables}
    )


class TestDBModelTemplate:
    def test_output(self, nb_schema):
        template, context = build_dbmodel_template("ovsmodel", nb_schema)
        assert new_generator().format(template, context).decode() == EXPECTED_DBMODEL

    def test_tables_sorted(self, nb_schema):
        _, context = build_dbmodel_template("ovsmodel", nb_schema)
        assert [t.name for t in context["tables"]] == [
            "ACL",
            "Logical_Switch",
            "Logical_Switch_Port",
        ]

    def test_custom_model_import(self, nb_schema):
        template, context = build_dbmodel_template(
            "ovsmodel", nb_schema, model_import="example.com/fork/model"
        )
        code = new_generator().format(template, context).decode()
        assert '\tmodel "example.com/fork/model"\n' in code

    def test_empty_database(self):
        template, context = build_dbmodel_template("ovsmodel", _schema({}))
        code = new_generator().format(template, context).decode()
        assert code.endswith(
            "func FullDatabaseModel() (*model.DBModel, error) {\n"
            '\treturn model.NewDBModel("DB", map[string]model.Model{})\n'
            "}\n"
        )

    def test_struct_name_conflict(self):
        schema = _schema({"Foo_Bar": {"columns": {}}, "FooBar": {"columns": {}}})
        with pytest.raises(NameConflictError):
            build_dbmodel_template("ovsmodel", schema)


class TestDatabaseModelGenerator:
    def test_templates(self, nb_schema):
        model_generator = DatabaseModelGenerator("ovsmodel", nb_schema)
        names = [name for name, _, _ in model_generator.templates()]
        assert names == [
            "acl.go",
            "logical_switch.go",
            "logical_switch_port.go",
            DBMODEL_FILE,
        ]

    def test_render(self, nb_schema):
        files = DatabaseModelGenerator("ovsmodel", nb_schema).render()
        assert files[DBMODEL_FILE].decode() == EXPECTED_DBMODEL
        assert b"type LogicalSwitchPort struct {\n" in files["logical_switch_port.go"]
        assert b"\tEnabled *bool " in files["logical_switch_port.go"]

    def test_generate_writes_all_files(self, nb_schema, tmp_path):
        output_dir = tmp_path / "ovsmodel"
        files = DatabaseModelGenerator("ovsmodel", nb_schema).generate(output_dir)

        assert sorted(p.name for p in output_dir.iterdir()) == sorted(files)
        assert (output_dir / DBMODEL_FILE).read_bytes() == files[DBMODEL_FILE]

    def test_extend_callback(self, nb_schema):
        def extend(name, template, context):
            if name != DBMODEL_FILE:
                context["file"] = name
                template.define(POST_STRUCT, "\n// from {{ file }}\n")

        files = DatabaseModelGenerator("ovsmodel", nb_schema, extend=extend).render()
        assert files["acl.go"].endswith(b"}\n\n// from acl.go\n")

    def test_nothing_written_when_one_table_fails(self, tmp_path):
        schema = _schema(
            {
                "Good": {"columns": {"name": {"type": "string"}}},
                "Zebra": {"columns": {"data": {"type": "blob"}}},
            }
        )
        with pytest.raises(UnrecognizedTypeError):
            DatabaseModelGenerator("ovsmodel", schema).generate(tmp_path / "out")
        assert not (tmp_path / "out").exists()

    def test_file_name_conflict(self):
        schema = _schema({"Model": {"columns": {}}})
        with pytest.raises(NameConflictError):
            DatabaseModelGenerator("ovsmodel", schema).render()

    def test_config_is_applied(self, nb_schema):
        config = ModelGenConfig(tag_key="ovsdb", acronyms=["port"])
        files = DatabaseModelGenerator("ovsmodel", nb_schema, config).render()
        assert b"type LogicalSwitchPORT struct {\n" in files["logical_switch_port.go"]
        assert b'`ovsdb:"action"`' in files["acl.go"]

    def test_validate_schema_warnings(self):
        schema = _schema({"Empty": {"columns": {}}, "__": {"columns": {}}})
        warnings = DatabaseModelGenerator("ovsmodel", schema).validate_schema()
        assert "Table 'Empty' has no columns" in warnings
        assert "Table '__' has no usable struct name" in warnings


class TestGeneratePackage:
    def test_success(self, nb_schema, tmp_path):
        config = ModelGenConfig(package_name="nbdb", output_dir=str(tmp_path))
        result = generate_package(nb_schema, config)

        assert result.success
        assert (tmp_path / "logical_switch.go").exists()
        assert result.metadata["database"] == "OVN_Northbound"
        assert result.metadata["table_count"] == 3
        assert b"package nbdb\n" in result.files[DBMODEL_FILE]

    def test_render_only(self, nb_schema, tmp_path):
        config = ModelGenConfig(output_dir=str(tmp_path / "out"))
        result = generate_package(nb_schema, config, write=False)

        assert result.success
        assert len(result.files) == 4
        assert not (tmp_path / "out").exists()

    def test_dry_run(self, nb_schema, tmp_path):
        stream = io.StringIO()
        config = ModelGenConfig(output_dir=str(tmp_path / "out"), dry_run=True)
        result = generate_package(
            nb_schema, config, generator=new_generator(dry_run=True, stream=stream)
        )

        assert result.success
        assert result.metadata["dry_run"] is True
        assert "func FullDatabaseModel()" in stream.getvalue()
        assert not (tmp_path / "out").exists()

    def test_failure_is_reported(self, tmp_path):
        schema = _schema({"Bad": {"columns": {"data": {"type": "blob"}}}})
        result = generate_package(schema, ModelGenConfig(output_dir=str(tmp_path)))

        assert not result.success
        assert "blob" in result.error_message
        assert isinstance(result.exception, UnrecognizedTypeError)

    def test_failure_keeps_schema_warnings(self, tmp_path):
        schema = _schema(
            {
                "Bad": {"columns": {"data": {"type": "blob"}}},
                "Empty": {"columns": {}},
            }
        )
        result = generate_package(schema, ModelGenConfig(output_dir=str(tmp_path)))

        assert not result.success
        assert "Table 'Empty' has no columns" in result.warnings
