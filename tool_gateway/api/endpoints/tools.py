# The module is to define the API endpoints for tool execution.
# Date: 2025-07-02
# Version: 0.1.0

from fastapi import APIRouter
from tool_gateway.core.dispatcher import dispatcher
from tool_gateway.core.errors import GatewayError, MissingToolNameError
from tool_gateway.core.tool_registry import tool_registry
from tool_gateway.utils.logger import console
from tool_gateway.models.api_models import (
    ErrorResponse,
    ExecuteToolRequest,
    ExecuteToolResponse,
    ToolListResponse,
)

router = APIRouter()

@router.post("/execute-tool",
             response_model=ExecuteToolResponse,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
             summary="Execute Tool")
async def execute_tool(request: ExecuteToolRequest):
    """
    Executes one tool, locally or on the sibling service that owns its prefix.
    """
    if not request.tool:
        raise MissingToolNameError()

    console.info(f"Executing: {request.tool} (Session: {request.sessionId or 'default'})")
    try:
        result = await dispatcher.execute(request.tool, request.args)
    except GatewayError:
        raise
    except Exception as e:
        console.exception(f"Unexpected failure while executing '{request.tool}'")
        raise GatewayError(str(e) or e.__class__.__name__) from e

    return ExecuteToolResponse(result=result)

@router.get("/tools",
            response_model=ToolListResponse,
            summary="Internal Tools")
def list_internal_tools():
    """
    Returns the definitions of the tools implemented by the gateway itself.
    """
    return ToolListResponse(tools=tool_registry.get_definitions())
