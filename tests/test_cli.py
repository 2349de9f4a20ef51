"""
tests/test_cli.py
-----------------
End-to-end runs of the ovsdb-modelgen command.
"""

import json

import pytest

from ovsdb_modelgen.cli import main

from .conftest import NB_SCHEMA


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "ovn-nb.ovsschema"
    path.write_text(json.dumps(NB_SCHEMA), encoding="utf-8")
    return path


class TestMain:
    def test_generate(self, schema_file, tmp_path):
        output_dir = tmp_path / "nbdb"

        exit_code = main([str(schema_file), "-p", "nbdb", "-o", str(output_dir)])

        assert exit_code == 0
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "acl.go",
            "logical_switch.go",
            "logical_switch_port.go",
            "model.go",
        ]
        assert (output_dir / "acl.go").read_text().splitlines()[3] == "package nbdb"

    def test_dry_run(self, schema_file, tmp_path, capsys):
        output_dir = tmp_path / "nbdb"

        exit_code = main([str(schema_file), "-d", "-o", str(output_dir)])

        assert exit_code == 0
        assert not output_dir.exists()
        assert "FullDatabaseModel" in capsys.readouterr().out

    def test_config_file(self, schema_file, tmp_path):
        config_path = tmp_path / "modelgen.json"
        config_path.write_text(json.dumps({"package_name": "fromfile"}))
        output_dir = tmp_path / "out"

        exit_code = main(
            [str(schema_file), "--config", str(config_path), "-o", str(output_dir)]
        )

        assert exit_code == 0
        assert "package fromfile\n" in (output_dir / "model.go").read_text()

    def test_no_input(self):
        assert main([]) == 1

    def test_missing_schema_file(self, tmp_path):
        assert main([str(tmp_path / "missing.ovsschema")]) == 1

    def test_bad_config_file(self, schema_file, tmp_path):
        assert main([str(schema_file), "--config", str(tmp_path / "nope.json")]) == 1

    def test_generation_failure(self, tmp_path):
        path = tmp_path / "bad.ovsschema"
        path.write_text(
            json.dumps(
                {
                    "name": "Bad",
                    "version": "1",
                    "tables": {"T": {"columns": {"c": {"type": "blob"}}}},
                }
            )
        )
        assert main([str(path), "-o", str(tmp_path / "out")]) == 1
        assert not (tmp_path / "out").exists()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "ovsdb-modelgen" in capsys.readouterr().out

    def test_generation_failure_shows_warnings(self, tmp_path, capsys):
        path = tmp_path / "bad.ovsschema"
        path.write_text(
            json.dumps(
                {
                    "name": "Bad",
                    "version": "1",
                    "tables": {
                        "Empty": {"columns": {}},
                        "T": {"columns": {"c": {"type": "blob"}}},
                    },
                }
            )
        )
        assert main([str(path), "-o", str(tmp_path / "out")]) == 1
        assert "Table 'Empty' has no columns" in capsys.readouterr().out
