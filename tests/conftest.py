"""Shared fixtures for the generator tests."""

import pytest

from ovsdb_modelgen.codegen.core.schema import DatabaseSchema

ATOMIC_TABLE = {
    "columns": {
        "str": {"type": "string"},
        "int": {"type": "integer"},
        "float": {"type": "real"},
    }
}

NB_SCHEMA = {
    "name": "OVN_Northbound",
    "version": "5.31.0",
    "tables": {
        "Logical_Switch": {
            "columns": {
                "name": {"type": "string"},
                "ports": {
                    "type": {
                        "key": {"type": "uuid", "refTable": "Logical_Switch_Port"},
                        "min": 0,
                        "max": "unlimited",
                    }
                },
                "external_ids": {
                    "type": {
                        "key": "string",
                        "value": "string",
                        "min": 0,
                        "max": "unlimited",
                    }
                },
            },
            "isRoot": True,
        },
        "Logical_Switch_Port": {
            "columns": {
                "name": {"type": "string"},
                "enabled": {"type": {"key": "boolean", "min": 0, "max": 1}},
                "tag": {
                    "type": {
                        "key": {"type": "integer", "minInteger": 1, "maxInteger": 4095},
                        "min": 0,
                        "max": 1,
                    }
                },
            }
        },
        "ACL": {
            "columns": {
                "priority": {"type": "integer"},
                "action": {
                    "type": {
                        "key": {
                            "type": "string",
                            "enum": ["set", ["allow", "drop", "reject"]],
                        }
                    }
                },
            },
            "isRoot": True,
        },
    },
}


@pytest.fixture
def atomic_schema() -> DatabaseSchema:
    """Database with one table holding a string, an integer and a real column."""
    return DatabaseSchema.from_dict(
        {
            "name": "AtomicDB",
            "version": "0.0.0",
            "tables": {"atomicTable": ATOMIC_TABLE},
        }
    )


@pytest.fixture
def atomic_table(atomic_schema):
    return atomic_schema.tables["atomicTable"]


@pytest.fixture
def nb_schema() -> DatabaseSchema:
    return DatabaseSchema.from_dict(NB_SCHEMA)
