"""
Tests for the published configuration schema
"""
import json

import pytest

from dc_agent.core.config_schema import (CONFIG_SCHEMA, TABLE_NAME_SCHEMA,
                                         get_config_schema)


def test_schema_is_the_same_object_every_call():
    assert get_config_schema() is get_config_schema()
    assert get_config_schema() is CONFIG_SCHEMA
    assert get_config_schema().to_dict() == get_config_schema().to_dict()


def test_root_schema():
    root = get_config_schema().config_schema
    assert root["type"] == "object"
    assert root["nullable"] is False
    assert list(root["properties"]) == ["tables"]


def test_tables_property():
    tables = get_config_schema().config_schema["properties"]["tables"]
    assert tables["description"] == "List of tables to make available in the schema and for querying"
    assert tables["type"] == "array"
    assert tables["nullable"] is True
    assert tables["items"] == {"$ref": "#/otherSchemas/TableName"}


def test_table_name_ref_resolves():
    document = get_config_schema().to_dict()
    ref = document["configSchema"]["properties"]["tables"]["items"]["$ref"]
    _, section, name = ref.split("/")
    assert name == TABLE_NAME_SCHEMA
    assert name in document[section]


def test_table_name_is_an_unconstrained_string():
    table_name = get_config_schema().other_schemas[TABLE_NAME_SCHEMA]
    assert dict(table_name) == {"nullable": False, "type": "string"}
    assert not {"pattern", "minLength", "maxLength", "enum", "format"} & set(table_name)


def test_schema_cannot_be_mutated():
    schema = get_config_schema()
    with pytest.raises(TypeError):
        schema.config_schema["type"] = "array"
    with pytest.raises(TypeError):
        schema.other_schemas[TABLE_NAME_SCHEMA]["type"] = "number"
    with pytest.raises(AttributeError):
        schema.config_schema = {}


def test_to_dict_returns_independent_copy():
    document = get_config_schema().to_dict()
    document["otherSchemas"]["TableName"]["type"] = "number"
    assert get_config_schema().other_schemas[TABLE_NAME_SCHEMA]["type"] == "string"


def test_to_dict_is_json_serializable():
    document = json.loads(json.dumps(get_config_schema().to_dict()))
    assert document == {
        "configSchema": {
            "type": "object",
            "nullable": False,
            "properties": {
                "tables": {
                    "description": "List of tables to make available in the schema and for querying",
                    "type": "array",
                    "items": {"$ref": "#/otherSchemas/TableName"},
                    "nullable": True,
                },
            },
        },
        "otherSchemas": {
            "TableName": {"nullable": False, "type": "string"},
        },
    }
