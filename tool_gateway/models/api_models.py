# The module is to define the API models for the gateway.
# Date: 2025-07-02
# Version: 0.2.0

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class ExecuteToolRequest(BaseModel):
    """
    Defines the request body for the /execute-tool endpoint.
    Attributes:
        tool (Optional[str]): The name of the tool to execute. Checked by the endpoint so
            that a missing name is reported as 'Missing tool name'.
        args (Dict[str, Any]): The tool's arguments; their shape is defined by the tool.
        sessionId (Optional[str]): Caller session identifier. Logged only.
    """
    tool: Optional[str] = Field(default=None, description="The name of the tool to execute.")
    args: Optional[Dict[str, Any]] = Field(default=None, description="The tool's arguments.")
    sessionId: Optional[str] = Field(default=None, description="Caller session identifier, logged only.")

class ExecuteToolResponse(BaseModel):
    """
    Defines the success body of the /execute-tool endpoint.
    Attributes:
        result (Any): The tool's result, passed through unchanged.
    """
    result: Any = None

class ErrorResponse(BaseModel):
    """
    Defines the body of every failed request.
    Attributes:
        error (str): A single human-readable message.
    """
    error: str

class DiscoveryResponse(BaseModel):
    """
    Defines the response body for the /discovery endpoint.
    Attributes:
        services (Dict[str, str]): The current registry snapshot, prefix -> base address.
    """
    services: Dict[str, str]

class ToolListResponse(BaseModel):
    """Defines the response body for the /tools endpoint."""
    tools: List[Dict[str, Any]]
