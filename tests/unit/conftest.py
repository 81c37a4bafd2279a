"""Unit test fixtures (pools and simulated services).

Provides stand-ins for the classification service without network access.
"""

import threading

import httpx
import pytest

from classification_guess.client.worker_pool import WorkerPool


@pytest.fixture
def worker_pool():
    """Two-thread worker pool, shut down after the test."""
    pool = WorkerPool(2)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def release_gate():
    """Event holding simulated slow services until the test releases it.

    Set on teardown so background calls finish and pools can shut down.
    """
    gate = threading.Event()
    yield gate
    gate.set()


@pytest.fixture
def slow_handler(release_gate, sample_guess_json):
    """Service answering only once release_gate is set (or after 5s)."""
    def _handler(request: httpx.Request) -> httpx.Response:
        release_gate.wait(timeout=5)
        return httpx.Response(200, text=sample_guess_json)

    return _handler


@pytest.fixture
def refusing_handler():
    """Service whose connection is always refused."""
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    return _handler
