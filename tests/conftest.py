"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit tests.
"""

from pathlib import Path
from typing import Callable, Optional
from uuid import UUID

import httpx
import pytest

from classification_guess.config import Settings
from classification_guess.mail.mail import Mail


FIXED_MESSAGE_ID = UUID("524e4f85-2d2f-4927-ab98-bd7a2f689773")
SERVICE_URL = "http://localhost:9000/email/classification/predict"


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"TIMEOUT_IN_MS": 50})
    """
    return Settings(
        SERVICE_URL=SERVICE_URL,
        HEADER_NAME="X-Classification-Guess",
        THREAD_COUNT=2,
        TIMEOUT_IN_MS=None,
        HTTP_TIMEOUT_SECONDS=5.0,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def fixed_id_generator() -> Callable[[], UUID]:
    """Id generator always returning FIXED_MESSAGE_ID."""
    return lambda: FIXED_MESSAGE_ID


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_mail(fixtures_dir: Path):
    """Factory fixture loading a fixture message as Mail.

    Usage:
        def test_something(load_mail):
            mail = load_mail("simple_text.eml")
    """
    def _load(name: str, recipients: Optional[list[str]] = None) -> Mail:
        return Mail.from_bytes((fixtures_dir / name).read_bytes(), recipients=recipients)

    return _load


@pytest.fixture
def sample_guess_json(fixtures_dir: Path) -> str:
    """Raw classification service answer."""
    return (fixtures_dir / "sample_guess.json").read_text(encoding="utf-8").strip()


@pytest.fixture
def mock_service():
    """Factory fixture for an httpx.Client backed by a MockTransport.

    Usage:
        def test_something(mock_service):
            client, requests = mock_service(lambda request: httpx.Response(200, text="{}"))

    Every request seen by the transport is appended to the returned list.
    """
    clients: list[httpx.Client] = []

    def _create(handler: Callable[[httpx.Request], httpx.Response]):
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client, seen

    yield _create

    for client in clients:
        client.close()
