"""
Schema of the configuration header, published through ``/capabilities`` so
callers can build and check the header before sending it.

The document is declared once at import time and never changes. It is not
used to validate incoming headers.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

TABLE_NAME_SCHEMA = "TableName"


def _freeze(value: Any) -> Any:
    """Read-only copy of a JSON-like value (dicts -> mappingproxy, lists -> tuples)"""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class ConfigSchemaResponse:
    """Root configuration schema plus the named schemas it references"""

    config_schema: Mapping[str, Any]
    other_schemas: Mapping[str, Mapping[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        """Fresh JSON-ready copy using the wire key names"""
        return {
            "configSchema": _thaw(self.config_schema),
            "otherSchemas": _thaw(self.other_schemas),
        }


CONFIG_SCHEMA = ConfigSchemaResponse(
    config_schema=_freeze({
        "type": "object",
        "nullable": False,
        "properties": {
            "tables": {
                "description": "List of tables to make available in the schema and for querying",
                "type": "array",
                "items": {"$ref": f"#/otherSchemas/{TABLE_NAME_SCHEMA}"},
                "nullable": True,
            },
        },
    }),
    other_schemas=_freeze({
        TABLE_NAME_SCHEMA: {
            "nullable": False,
            "type": "string",
        },
    }),
)


def get_config_schema() -> ConfigSchemaResponse:
    return CONFIG_SCHEMA
