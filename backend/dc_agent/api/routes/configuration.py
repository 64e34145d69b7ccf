"""
Effective configuration endpoint
"""
from fastapi import APIRouter, Depends

from dc_agent.core.logging_config import LoggingConfig
from dc_agent.core.source_config import SourceConfig, get_config

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["config"])


@router.get("/config")
async def effective_config(config: SourceConfig = Depends(get_config)):
    """
    Return the configuration decoded from this request's
    x-hasura-dataconnector-config header. Lets callers check a header
    before using it against /schema or /query.
    """
    logger.info("Effective configuration requested", extra={"restricts_tables": config.restricts_tables})
    return {"tables": config.tables}
