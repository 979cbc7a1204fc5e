"""Shared fixtures: fake sibling services and a clean service registry per test."""
from typing import Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tool_gateway.core.config import ServiceCandidate
from tool_gateway.core.service_registry import service_registry


@pytest.fixture(autouse=True)
def empty_service_registry():
    """Every test starts and ends with no discovered services."""
    service_registry.replace({})
    yield service_registry
    service_registry.replace({})


@pytest.fixture
def candidates() -> List[ServiceCandidate]:
    return [
        ServiceCandidate(name="git", address="http://127.0.0.1:3002"),
        ServiceCandidate(name="github", address="http://127.0.0.1:3003"),
        ServiceCandidate(name="data", address="http://127.0.0.1:3004"),
        ServiceCandidate(name="memory", address="http://127.0.0.1:3005"),
    ]


def _sibling_transport(
    statuses: Dict[int, int],
    results: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    seen: Optional[List[httpx.Request]] = None,
) -> httpx.MockTransport:
    """
    Fake network of sibling services keyed by port.
    Ports listed in 'statuses' answer with that status; every other port refuses the connection.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        status = statuses.get(request.url.port)
        if status is None:
            raise httpx.ConnectError("Connection refused", request=request)
        if results is not None and status == 200:
            return results(request)
        return httpx.Response(status, json={"result": "alive"} if status == 200 else {"error": "nope"})

    return httpx.MockTransport(handler)


@pytest.fixture
def fake_browser():
    """A Playwright browser whose page shows 20000 characters of body text."""
    page = MagicMock()
    page.goto = AsyncMock()
    page.title = AsyncMock(return_value="Long Page")
    page.evaluate = AsyncMock(return_value="a" * 20000)

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()
    browser.page = page
    return browser


@pytest.fixture
def fake_playwright(fake_browser):
    """Replacement for async_playwright() that launches fake_browser."""
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=fake_browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=manager)


@pytest.fixture
def make_transport():
    return _sibling_transport
