# The module executes a tool invocation end to end: resolve, then run locally or forward.
# Date: 2025-07-02
# Version: 0.1.0

import time
from typing import Any, Mapping, Optional

from tool_gateway.core.errors import GatewayError
from tool_gateway.core.router import REMOTE, resolve
from tool_gateway.core.service_registry import ServiceRegistry, service_registry
from tool_gateway.core.tool_registry import ToolRegistry, tool_registry
from tool_gateway.services.proxy_client import ProxyClient
from tool_gateway.utils.logger import console


class ToolDispatcher:
    """
    Routes a tool invocation to the owning sibling service or to an internal tool.
    Each call reads one registry snapshot and never writes to it.
    """
    def __init__(self, services: ServiceRegistry, tools: ToolRegistry, proxy_client: ProxyClient):
        self.services = services
        self.tools = tools
        self.proxy_client = proxy_client

    async def execute(self, tool_name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        snapshot = self.services.snapshot()
        resolution = resolve(tool_name, snapshot, self.tools)

        t0 = time.monotonic()
        try:
            if resolution.kind == REMOTE:
                result = await self.proxy_client.execute(resolution.service.base_address, tool_name, args)
            else:
                result = await self.tools.execute(tool_name, args)
        except GatewayError as e:
            console.error(f"Tool '{tool_name}' ({resolution.kind}) failed: {e.message}")
            raise

        elapsed = time.monotonic() - t0
        console.success(f"Tool '{tool_name}' ({resolution.kind}) completed in {elapsed:.2f}s")
        return result


# Create a singleton instance for global use throughout the application.
dispatcher = ToolDispatcher(service_registry, tool_registry, ProxyClient())
