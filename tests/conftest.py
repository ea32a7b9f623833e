from __future__ import annotations

import os

# Settings are resolved at import time; pin the test profile first.
os.environ["APP_ENV"] = "test"

from collections.abc import Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def mock_http():
    """Return a factory producing an ``httpx.Client`` answered by ``handler``.

    Every request is appended to the returned list so tests can assert on
    what went over the wire (or that nothing did).
    """
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> tuple[httpx.Client, list[httpx.Request]]:
        calls: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client, calls

    yield _make
    for client in clients:
        client.close()


@pytest.fixture()
def no_network() -> Handler:
    def _fail(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected HTTP call: {request.method} {request.url}")

    return _fail
