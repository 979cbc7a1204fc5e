# The module discovers sibling tool services by probing a fixed list of candidates.
# Date: 2025-07-02
# Version: 0.1.0

import asyncio
from typing import Dict, List, Optional, Sequence

import httpx

from tool_gateway.core.config import ServiceCandidate, get_settings
from tool_gateway.core.service_registry import ServiceRegistry, service_registry
from tool_gateway.utils.logger import console

HEARTBEAT_PAYLOAD = {"tool": "heartbeat", "args": {}}


class DiscoveryService:
    """
    Periodically probes every candidate with a heartbeat call and rebuilds the
    service registry from the candidates that answered.

    A candidate's prefix is derived from the name it is given in the candidate
    list, not from anything the service reports about itself. Two deployments
    with different candidate lists can therefore bind different prefixes to the
    same address.
    """
    def __init__(
        self,
        registry: ServiceRegistry,
        candidates: Sequence[ServiceCandidate],
        interval: float = 60.0,
        probe_timeout: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.registry = registry
        self.candidates: List[ServiceCandidate] = list(candidates)
        self.interval = interval
        self.probe_timeout = probe_timeout
        self._transport = transport
        self._task: Optional[asyncio.Task] = None

    async def probe(self, client: httpx.AsyncClient, candidate: ServiceCandidate) -> bool:
        """
        Sends the heartbeat call to one candidate.
        A 2xx or 404 answer means the service exists; anything else means it is absent.
        """
        url = f"{candidate.address.rstrip('/')}/execute-tool"
        try:
            response = await client.post(url, json=HEARTBEAT_PAYLOAD, timeout=self.probe_timeout)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            console.debug(f"Candidate '{candidate.name}' at {candidate.address} is absent: {e!r}")
            return False
        alive = response.is_success or response.status_code == 404
        if not alive:
            console.debug(f"Candidate '{candidate.name}' answered heartbeat with {response.status_code}")
        return alive

    async def run_cycle(self) -> Dict[str, str]:
        """
        Probes all candidates concurrently and publishes a new registry snapshot.
        Returns the prefix -> address mapping that was published.
        """
        async with httpx.AsyncClient(transport=self._transport) as client:
            results = await asyncio.gather(
                *(self.probe(client, candidate) for candidate in self.candidates),
                return_exceptions=True,
            )

        services = {}
        for candidate, alive in zip(self.candidates, results):
            if isinstance(alive, Exception):
                console.debug(f"Candidate '{candidate.name}' at {candidate.address} is absent: {alive!r}")
            elif alive:
                services[candidate.prefix] = candidate.address
        self.registry.replace(services)
        return services

    async def _loop(self):
        while True:
            try:
                await self.run_cycle()
            except Exception:
                console.exception("Discovery cycle failed unexpectedly; keeping the previous registry.")
            await asyncio.sleep(self.interval)

    @property
    def task(self) -> Optional[asyncio.Task]:
        """The running background loop, or None when discovery is not started."""
        return self._task

    def start(self) -> asyncio.Task:
        """Starts the background loop. The first cycle runs immediately."""
        if self._task is None or self._task.done():
            console.info(
                f"Starting service discovery over {len(self.candidates)} candidates "
                f"every {self.interval:g}s."
            )
            self._task = asyncio.create_task(self._loop(), name="service-discovery")
        return self._task

    async def stop(self):
        """Cancels the background loop and waits for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        console.info("Service discovery stopped.")


def build_discovery_service(registry: ServiceRegistry = service_registry) -> DiscoveryService:
    """Creates a DiscoveryService configured from the application settings."""
    settings = get_settings()
    return DiscoveryService(
        registry=registry,
        candidates=settings.DISCOVERY_CANDIDATES,
        interval=settings.DISCOVERY_INTERVAL,
        probe_timeout=settings.DISCOVERY_PROBE_TIMEOUT,
    )
