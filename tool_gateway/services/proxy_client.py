# The module forwards tool calls to discovered sibling services over HTTP.
# Date: 2025-07-02
# Version: 0.1.0

from typing import Any, Mapping, Optional

import httpx

from tool_gateway.core.config import get_settings
from tool_gateway.core.errors import ProxyApplicationError, ProxyNetworkError
from tool_gateway.utils.logger import console

EXECUTE_PATH = "/execute-tool"


def _error_message(response: httpx.Response) -> str:
    """Extracts '{"error": ...}' from a failed response, or falls back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"{response.status_code} {response.reason_phrase}".strip()


class ProxyClient:
    """
    Sends '{"tool": ..., "args": ...}' to '<base_address>/execute-tool' and
    returns the 'result' of the answer unchanged.

    Failures come in two kinds: ProxyApplicationError when the service answers
    with a non-success status, ProxyNetworkError when it cannot be reached or
    its answer cannot be read. There are no retries.
    """
    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout if timeout is not None else get_settings().PROXY_TIMEOUT
        self._transport = transport

    async def execute(self, base_address: str, tool_name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        url = f"{base_address.rstrip('/')}{EXECUTE_PATH}"
        payload = {"tool": tool_name, "args": dict(args or {})}
        console.info(f"Forwarding tool '{tool_name}' to {url}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as e:
            console.error(f"Timed out forwarding '{tool_name}' to {url}: {e!r}")
            raise ProxyNetworkError(f"Request to {url} timed out after {self.timeout:g}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            console.error(f"Network error forwarding '{tool_name}' to {url}: {e!r}")
            raise ProxyNetworkError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            console.warning(f"Service at {base_address} rejected '{tool_name}' with {response.status_code}: {message}")
            raise ProxyApplicationError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            console.error(f"Service at {base_address} returned a non-JSON body for '{tool_name}'.")
            raise ProxyNetworkError(f"Malformed response from {url}: body is not JSON") from e
        if not isinstance(body, dict) or "result" not in body:
            console.error(f"Service at {base_address} returned no 'result' for '{tool_name}'.")
            raise ProxyNetworkError(f"Malformed response from {url}: missing 'result'")

        return body["result"]
