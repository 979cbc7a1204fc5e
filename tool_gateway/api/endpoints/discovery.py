# The module is to define the API endpoint reporting discovered services.
# Date: 2025-07-02
# Version: 0.1.0

from fastapi import APIRouter
from tool_gateway.core.service_registry import service_registry
from tool_gateway.models.api_models import DiscoveryResponse

router = APIRouter()

@router.get("/discovery",
            response_model=DiscoveryResponse,
            summary="Discovered Services")
def get_discovered_services():
    """
    Returns the current registry snapshot as a prefix -> base address mapping.
    """
    return DiscoveryResponse(services=service_registry.as_dict())
