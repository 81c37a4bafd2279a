"""
Classification service invoker.

POSTs a ClassificationRequest to the classification service on the bounded
worker pool and waits for the answer, at most for the configured deadline.

POST <endpoint>?recipients=a%40x&recipients=b%40x
Content-Type: application/json

{"messageId":"...","from":[...],"recipients":{...},"subject":["..."],"textBody":"..."}

The full response body is the answer. Nothing raised in here reaches the
caller: every failure becomes NO_ANSWER.
"""

import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Iterable, Optional
from uuid import UUID

import httpx
import structlog

from classification_guess.client.worker_pool import WorkerPool
from classification_guess.models.outcome import NO_ANSWER, Answer, Outcome
from classification_guess.models.request_models import ClassificationRequest
from classification_guess.monitoring.metrics import (
    classification_latency_seconds,
    classification_outcomes_total,
)


logger = structlog.get_logger(__name__)

RECIPIENTS_PARAMETER = "recipients"
JSON_HEADERS = {"Content-Type": "application/json"}


def build_service_url(endpoint: str, recipients: Iterable[str]) -> httpx.URL:
    """
    Append one recipients query parameter per address.

    Parameters are repeated, not comma joined; existing query parameters
    of the endpoint are kept.
    """
    url = httpx.URL(endpoint)
    params = list(url.params.multi_items())
    params.extend((RECIPIENTS_PARAMETER, address) for address in recipients)
    return url.copy_with(params=httpx.QueryParams(params))


class ClassificationInvoker:
    """
    Runs classification calls on a shared WorkerPool.

    Deadline expiry stops the caller's wait, not the call: a request already
    running keeps its worker until it completes or the HTTP timeout fires,
    and its result is discarded. A request still queued is cancelled.
    """

    def __init__(
        self,
        endpoint: str,
        pool: WorkerPool,
        http_client: Optional[httpx.Client] = None,
        http_timeout: float = 30.0,
    ):
        """
        Initialize the invoker.

        Args:
            endpoint: Classification service URL
            pool: Worker pool the calls run on (owned by the caller)
            http_client: Shared client; created here when not given
            http_timeout: Transport timeout in seconds for a created client
        """
        self.endpoint = endpoint
        self._pool = pool
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=httpx.Timeout(http_timeout))

        logger.info(
            "Initialized classification invoker",
            endpoint=endpoint,
            pool_size=pool.size,
            http_timeout=http_timeout if self._owns_client else None,
        )

    def invoke(
        self,
        request: ClassificationRequest,
        recipients: Iterable[str],
        deadline_ms: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> Outcome:
        """
        Ask the classification service for a guess.

        Args:
            request: Request to send
            recipients: Envelope recipients, sent as query parameters
            deadline_ms: Maximum wait in milliseconds, None waits forever
            endpoint: Overrides the configured endpoint

        Returns:
            Answer with the raw response body, or NO_ANSWER
        """
        try:
            url = build_service_url(endpoint or self.endpoint, recipients)
            body = request.to_json().encode("utf-8")
            future = self._pool.submit(self._post, url, body, request.message_id)
        except Exception as e:
            logger.error(
                "Could not submit classification request",
                message_id=str(request.message_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            classification_outcomes_total.labels(outcome="transport_error").inc()
            return NO_ANSWER

        return self._await(future, deadline_ms, request.message_id)

    def _await(self, future: "Future[Outcome]", deadline_ms: Optional[int], message_id: UUID) -> Outcome:
        timeout = None if deadline_ms is None else deadline_ms / 1000.0
        try:
            outcome = future.result(timeout=timeout)
        except FutureTimeoutError:
            # Only effective while the task is still queued
            future.cancel()
            logger.info(
                "Could not retrieve classification before timeout",
                message_id=str(message_id),
                timeout_ms=deadline_ms,
            )
            classification_outcomes_total.labels(outcome="timeout").inc()
            return NO_ANSWER
        except Exception as e:
            logger.error(
                "Could not retrieve classification",
                message_id=str(message_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            classification_outcomes_total.labels(outcome="transport_error").inc()
            return NO_ANSWER

        label = "answer" if isinstance(outcome, Answer) else "transport_error"
        classification_outcomes_total.labels(outcome=label).inc()
        return outcome

    def _post(self, url: httpx.URL, body: bytes, message_id: UUID) -> Outcome:
        """Worker side: one POST, one outcome. Never raises."""
        start_time = time.monotonic()
        try:
            response = self._client.post(url, content=body, headers=JSON_HEADERS)
            response.raise_for_status()
            text = response.content.decode("utf-8")
        except httpx.TimeoutException as e:
            self._log_failure("Classification service timeout", message_id, start_time, e)
            return NO_ANSWER
        except httpx.HTTPStatusError as e:
            self._log_failure(
                "Classification service HTTP error",
                message_id,
                start_time,
                e,
                status_code=e.response.status_code,
            )
            return NO_ANSWER
        except (httpx.HTTPError, UnicodeDecodeError) as e:
            self._log_failure("Error occurred while contacting classification service", message_id, start_time, e)
            return NO_ANSWER
        except Exception as e:
            self._log_failure("Unexpected error in classification call", message_id, start_time, e)
            return NO_ANSWER

        latency = time.monotonic() - start_time
        classification_latency_seconds.labels(success="true").observe(latency)
        logger.debug(
            "Classification service answered",
            message_id=str(message_id),
            latency_ms=int(latency * 1000),
            status_code=response.status_code,
        )
        return Answer(text)

    def _log_failure(
        self, event: str, message_id: UUID, start_time: float, error: Exception, **extra
    ) -> None:
        latency = time.monotonic() - start_time
        classification_latency_seconds.labels(success="false").observe(latency)
        logger.error(
            event,
            message_id=str(message_id),
            latency_ms=int(latency * 1000),
            error=str(error),
            error_type=type(error).__name__,
            **extra,
        )

    def close(self) -> None:
        """Close the HTTP client if this invoker created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()
            logger.debug("Closed classification HTTP client")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint}, pool={self._pool!r})"
