# The module resolves a tool name to a discovered service or an internal tool.
# Date: 2025-07-02
# Version: 0.1.0

from dataclasses import dataclass
from typing import Container, Mapping, Optional

from tool_gateway.core.errors import UnknownToolError
from tool_gateway.core.service_registry import ServiceDescriptor

REMOTE = "remote"
INTERNAL = "internal"


@dataclass(frozen=True)
class Resolution:
    """
    Where a tool call goes.
    Attributes:
        kind (str): REMOTE or INTERNAL.
        tool (str): The tool name, unchanged.
        service (Optional[ServiceDescriptor]): The owning service when kind is REMOTE.
    """
    kind: str
    tool: str
    service: Optional[ServiceDescriptor] = None


def match_prefix(
    tool_name: str, services: Mapping[str, ServiceDescriptor]
) -> Optional[ServiceDescriptor]:
    """
    Returns the service whose prefix is the longest literal prefix of tool_name.
    Ties between prefixes of equal length go to the lexicographically smallest.
    """
    candidates = [prefix for prefix in services if tool_name.startswith(prefix)]
    if not candidates:
        return None
    best = min(candidates, key=lambda prefix: (-len(prefix), prefix))
    return services[best]


def resolve(
    tool_name: str,
    services: Mapping[str, ServiceDescriptor],
    internal_tools: Container[str],
) -> Resolution:
    """
    Resolves a tool name against one registry snapshot.

    A matching service prefix always wins, even over an internal tool of the
    same name; internal tools are looked up by exact name only when no
    prefix matches.

    Raises:
        UnknownToolError: If neither a prefix nor an internal tool matches.
    """
    service = match_prefix(tool_name, services)
    if service is not None:
        return Resolution(kind=REMOTE, tool=tool_name, service=service)
    if tool_name in internal_tools:
        return Resolution(kind=INTERNAL, tool=tool_name)
    raise UnknownToolError(tool_name)
