"""
Per-request data source configuration carried in the
``x-hasura-dataconnector-config`` header.

The caller sends the configuration as a JSON object on every request; nothing
is stored between requests. A missing header means "no configuration" and
decodes to ``{"tables": null}`` (all tables visible), as does any JSON value
that is not an object (arrays, strings, numbers, booleans). Malformed JSON and
JSON ``null`` are client errors: ``get_config`` raises ``ConfigDecodeError``
and the application answers 400.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from dc_agent.core.logging_config import LoggingConfig
from dc_agent.core.metrics import config_decode_total

logger = LoggingConfig.get_logger(__name__)

CONFIG_HEADER = "x-hasura-dataconnector-config"
EMPTY_CONFIG_JSON = "{}"


class SourceConfig(BaseModel):
    """Effective configuration for a single request"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tables: Optional[List[str]] = Field(
        default=None,
        description="List of tables to make available in the schema and for querying",
    )

    @property
    def restricts_tables(self) -> bool:
        """False when every table is visible (``tables`` is null or empty)"""
        return bool(self.tables)


class ConfigDecodeError(Exception):
    """Raised when the configuration header cannot be decoded"""

    def __init__(self, reason: str, header_value: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.header_value = header_value


@dataclass(frozen=True)
class ConfigDecodeResult:
    """Outcome of decoding a header: either ``config`` or ``error`` is set"""

    config: Optional[SourceConfig] = None
    error: Optional[str] = None
    header_value: Optional[str] = None

    @classmethod
    def success(cls, config: SourceConfig, header_value: Optional[str] = None) -> "ConfigDecodeResult":
        return cls(config=config, header_value=header_value)

    @classmethod
    def failure(cls, reason: str, header_value: Optional[str] = None) -> "ConfigDecodeResult":
        return cls(error=reason, header_value=header_value)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> SourceConfig:
        """Return the config or raise ``ConfigDecodeError``"""
        if self.error is not None:
            raise ConfigDecodeError(self.error, self.header_value)
        return self.config


def select_header_value(values: Sequence[str]) -> str:
    """First value received on the wire, or ``{}`` when the header is absent"""
    if not values:
        return EMPTY_CONFIG_JSON
    return values[0]


def decode_config_value(raw: Optional[str]) -> ConfigDecodeResult:
    """
    Decode the raw header text into a SourceConfig.

    ``tables`` is copied as sent: element types are not checked and
    duplicates and ordering are preserved. Fields other than ``tables``
    are ignored.

    Args:
        raw: Header value, or None when the header was not sent

    Returns:
        ConfigDecodeResult
    """
    text = EMPTY_CONFIG_JSON if raw is None else raw

    try:
        parsed: Any = json.loads(text)
    except json.JSONDecodeError as e:
        return ConfigDecodeResult.failure(
            f"Invalid JSON in {CONFIG_HEADER} header: {e.msg} (line {e.lineno}, column {e.colno})",
            header_value=raw,
        )

    if parsed is None:
        return ConfigDecodeResult.failure(
            f"{CONFIG_HEADER} header must not be JSON null",
            header_value=raw,
        )

    # Arrays, strings, numbers and booleans carry no ``tables`` field
    tables = parsed.get("tables") if isinstance(parsed, dict) else None
    # model_construct keeps ``tables`` verbatim; consumers own table validation
    config = SourceConfig.model_construct(tables=tables)
    return ConfigDecodeResult.success(config, header_value=raw)


def decode_config(request: Request) -> ConfigDecodeResult:
    """Decode the configuration header of an inbound request"""
    values = request.headers.getlist(CONFIG_HEADER)
    if len(values) > 1:
        logger.debug(
            "Multiple configuration headers received, using the first",
            extra={"header_count": len(values)},
        )

    result = decode_config_value(select_header_value(values))
    source = "header" if values else "default"

    if result.ok:
        config_decode_total.labels(outcome="success", source=source).inc()
        logger.debug(
            "Decoded data source configuration",
            extra={"tables": result.config.tables},
        )
    else:
        config_decode_total.labels(outcome="failure", source=source).inc()
        logger.warning(
            "Rejected configuration header",
            extra={"reason": result.error},
        )
    return result


def get_config(request: Request) -> SourceConfig:
    """
    FastAPI dependency giving operation handlers the request's configuration.

    Usage:
        @router.get("/schema")
        async def schema(config: SourceConfig = Depends(get_config)):
            ...
    """
    return decode_config(request).unwrap()
