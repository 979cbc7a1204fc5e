# The module defines the error taxonomy shared by the router, the tools and the proxy client.
# Date: 2025-07-02
# Version: 0.1.0


class GatewayError(Exception):
    """
    Base class of every error the gateway reports to a caller.
    The message is what ends up in the '{"error": ...}' response body.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(GatewayError):
    """A request or a tool's arguments are missing required fields or have the wrong shape."""


class MissingToolNameError(ValidationError):
    """The request body does not name a tool."""
    def __init__(self):
        super().__init__("Missing tool name")


class UnknownToolError(GatewayError):
    """The tool name matches neither a discovered prefix nor an internal tool."""
    def __init__(self, tool_name: str):
        super().__init__(f"Tool '{tool_name}' is not discovered or implemented.")
        self.tool_name = tool_name


class HandlerError(GatewayError):
    """A local tool failed: filesystem, subprocess or browser."""


class ProxyError(GatewayError):
    """A forwarded tool call failed."""


class ProxyApplicationError(ProxyError):
    """The remote service answered with a non-success status."""
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProxyNetworkError(ProxyError):
    """The remote service could not be reached or answered with an unreadable response."""
