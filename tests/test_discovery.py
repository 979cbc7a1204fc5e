"""Tests for core/discovery.py: heartbeat probing and registry rebuilds."""
import asyncio
import json

import httpx
import pytest

from tool_gateway.core.config import ServiceCandidate
from tool_gateway.core.discovery import DiscoveryService
from tool_gateway.core.service_registry import ServiceRegistry


def _service(candidates, transport, registry=None, interval=60.0):
    return DiscoveryService(
        registry=registry or ServiceRegistry(),
        candidates=candidates,
        interval=interval,
        probe_timeout=1.0,
        transport=transport,
    )


class TestProbe:
    @pytest.mark.asyncio
    async def test_heartbeat_request_shape(self, candidates, make_transport):
        seen = []
        discovery = _service(candidates[:1], make_transport({3002: 200}, seen=seen))
        await discovery.run_cycle()

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://127.0.0.1:3002/execute-tool"
        assert json.loads(request.content) == {"tool": "heartbeat", "args": {}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,alive", [(200, True), (204, True), (404, True), (400, False), (500, False), (503, False)])
    async def test_status_classes(self, candidates, make_transport, status, alive):
        discovery = _service(candidates[:1], make_transport({3002: status}))
        services = await discovery.run_cycle()
        assert ("git_" in services) is alive

    @pytest.mark.asyncio
    async def test_timeout_is_absent(self, candidates):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        discovery = _service(candidates[:1], httpx.MockTransport(handler))
        assert await discovery.run_cycle() == {}

    @pytest.mark.asyncio
    async def test_invalid_address_is_absent(self, make_transport):
        discovery = _service([ServiceCandidate(name="bad", address="not a url")], make_transport({}))
        assert await discovery.run_cycle() == {}


class TestRunCycle:
    @pytest.mark.asyncio
    async def test_only_first_candidate_alive(self, candidates, make_transport):
        registry = ServiceRegistry()
        discovery = _service(candidates, make_transport({3002: 200}), registry)

        await discovery.run_cycle()

        assert registry.as_dict() == {"git_": "http://127.0.0.1:3002"}

    @pytest.mark.asyncio
    async def test_no_candidate_alive_gives_empty_registry(self, candidates, make_transport):
        registry = ServiceRegistry()
        registry.replace({"stale_": "http://old"})
        discovery = _service(candidates, make_transport({}), registry)

        await discovery.run_cycle()

        assert registry.as_dict() == {}

    @pytest.mark.asyncio
    async def test_dead_service_removed_after_one_cycle(self, candidates, make_transport):
        registry = ServiceRegistry()
        statuses = {3002: 200, 3004: 404}
        discovery = _service(candidates, make_transport(statuses), registry)

        await discovery.run_cycle()
        assert set(registry.as_dict()) == {"git_", "data_"}

        del statuses[3002]
        await discovery.run_cycle()
        assert registry.as_dict() == {"data_": "http://127.0.0.1:3004"}

    @pytest.mark.asyncio
    async def test_probes_run_concurrently(self, candidates):
        in_flight = 0
        peak = 0

        async def handler(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.05)
            in_flight -= 1
            return httpx.Response(200, json={"result": "alive"})

        discovery = _service(candidates, httpx.MockTransport(handler))
        services = await discovery.run_cycle()

        assert peak == len(candidates)
        assert len(services) == len(candidates)

    @pytest.mark.asyncio
    async def test_unexpected_error_drops_only_that_candidate(self, candidates):
        def handler(request):
            if request.url.port == 3003:
                raise RuntimeError("transport blew up")
            return httpx.Response(200, json={"result": "alive"})

        registry = ServiceRegistry()
        discovery = _service(candidates, httpx.MockTransport(handler), registry)

        services = await discovery.run_cycle()

        assert set(services) == {"git_", "data_", "memory_"}
        assert registry.as_dict() == services

    @pytest.mark.asyncio
    async def test_prefix_comes_from_candidate_position_not_service(self, make_transport):
        # The same address bound under two different names gives two prefixes.
        candidates = [
            ServiceCandidate(name="git", address="http://127.0.0.1:3002"),
            ServiceCandidate(name="vcs", address="http://127.0.0.1:3002"),
        ]
        discovery = _service(candidates, make_transport({3002: 200}))
        services = await discovery.run_cycle()
        assert services == {"git_": "http://127.0.0.1:3002", "vcs_": "http://127.0.0.1:3002"}


class TestBackgroundLoop:
    @pytest.mark.asyncio
    async def test_start_runs_first_cycle_immediately_and_stop_cancels(self, candidates, make_transport):
        registry = ServiceRegistry()
        discovery = _service(candidates, make_transport({3003: 200}), registry, interval=3600)

        task = discovery.start()
        for _ in range(50):
            if registry.as_dict():
                break
            await asyncio.sleep(0.01)

        assert registry.as_dict() == {"github_": "http://127.0.0.1:3003"}
        assert discovery.start() is task

        await discovery.stop()
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_loop_reschedules(self, candidates, make_transport):
        seen = []
        discovery = _service(candidates[:1], make_transport({3002: 200}, seen=seen), interval=0.01)

        discovery.start()
        for _ in range(100):
            if len(seen) >= 3:
                break
            await asyncio.sleep(0.01)
        await discovery.stop()

        assert len(seen) >= 3

    @pytest.mark.asyncio
    async def test_stop_without_start(self, candidates, make_transport):
        discovery = _service(candidates, make_transport({}))
        await discovery.stop()
