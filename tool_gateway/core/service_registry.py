# The module holds the table of discovered sibling services.
# Date: 2025-07-02
# Version: 0.1.0

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from tool_gateway.utils.logger import console


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    A discovered sibling service.
    Attributes:
        prefix (str): Namespace of the tools the service owns, e.g. 'git_'. Unique within a snapshot.
        base_address (str): Base URL of the service, without the '/execute-tool' path.
    """
    prefix: str
    base_address: str


class ServiceRegistry:
    """
    Prefix -> ServiceDescriptor table, published as immutable snapshots.

    The registry is never edited in place. Every update builds a new mapping and
    swaps the reference in a single assignment, so a reader holding a snapshot
    always sees one complete version of the table.
    """
    def __init__(self):
        self._snapshot: Mapping[str, ServiceDescriptor] = MappingProxyType({})

    def snapshot(self) -> Mapping[str, ServiceDescriptor]:
        """Returns the current read-only snapshot."""
        return self._snapshot

    def replace(self, services: Mapping[str, str]) -> Mapping[str, ServiceDescriptor]:
        """
        Publishes a new snapshot built from a prefix -> address mapping.
        Returns the snapshot that was replaced.
        """
        fresh: Dict[str, ServiceDescriptor] = {
            prefix: ServiceDescriptor(prefix=prefix, base_address=address)
            for prefix, address in services.items()
        }
        previous = self._snapshot
        self._snapshot = MappingProxyType(fresh)
        if set(previous) != set(fresh):
            console.info(f"Service registry updated: {sorted(fresh) or 'no services'}")
        return previous

    def as_dict(self) -> Dict[str, str]:
        """Returns the current snapshot as a plain prefix -> address dict."""
        return {prefix: service.base_address for prefix, service in self._snapshot.items()}


# Create a singleton instance for global use throughout the application.
service_registry = ServiceRegistry()
