# The module is to define the API router for the gateway.
# Date: 2025-07-02
# Version: 0.2.0

from fastapi import APIRouter
from tool_gateway.api.endpoints import discovery, tools

api_router = APIRouter()

api_router.include_router(discovery.router, tags=["Discovery"])

api_router.include_router(tools.router, tags=["Tool Execution"])
