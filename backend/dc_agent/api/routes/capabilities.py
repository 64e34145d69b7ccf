"""
Capabilities endpoint: advertises what the agent supports and the schema of
the configuration header
"""
from typing import Any, Dict

from fastapi import APIRouter

from dc_agent.core.config_schema import get_config_schema

router = APIRouter(tags=["capabilities"])

# Capability negotiation lives in the query layer; only the static set is reported here
CAPABILITIES: Dict[str, Any] = {
    "relationships": {},
}


@router.get("/capabilities")
async def get_capabilities() -> Dict[str, Any]:
    """
    Capabilities of the agent

    Returns:
        dict: ``capabilities`` and ``configSchemas`` (schema of the
        x-hasura-dataconnector-config header)
    """
    return {
        "capabilities": CAPABILITIES,
        "configSchemas": get_config_schema().to_dict(),
    }
