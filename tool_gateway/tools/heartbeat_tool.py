# The module defines the heartbeat tool, so that other gateways can discover this one.
# Date: 2025-07-02
# Version: 0.1.0

from typing import Type

from pydantic import BaseModel

from .base_tool import BaseTool


class HeartbeatInput(BaseModel):
    """The heartbeat takes no arguments."""


class HeartbeatTool(BaseTool):
    """No-op tool answered by every service that speaks the tool-invocation protocol."""
    name: str = "heartbeat"
    description: str = "Liveness check. Returns 'alive' and does nothing else."
    args_schema: Type[BaseModel] = HeartbeatInput

    async def execute(self) -> str:
        return "alive"
