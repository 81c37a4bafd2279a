"""
Pipeline stage adding a classification guess header to each mail.

Configuration (environment, see config.Settings):
- CLASSIFICATION_SERVICE_URL: URL of the classification service (mandatory)
- CLASSIFICATION_HEADER_NAME: header to add, default X-Classification-Guess
- CLASSIFICATION_THREAD_COUNT: number of worker threads, default 2
- CLASSIFICATION_TIMEOUT_IN_MS: how long to wait for an answer, default forever

Sample:
    CLASSIFICATION_SERVICE_URL=http://localhost:9000/email/classification/predict
    CLASSIFICATION_TIMEOUT_IN_MS=500

After initialization nothing escapes process(): the only visible symptom
of any failure is a missing header.
"""

import uuid
from typing import Callable, Optional
from uuid import UUID

import httpx
import structlog

from classification_guess.client.invoker import ClassificationInvoker
from classification_guess.client.worker_pool import WorkerPool
from classification_guess.config import Settings
from classification_guess.exceptions import SerializationError
from classification_guess.mail.mail import Mail
from classification_guess.mail.request_builder import RequestBuilder
from classification_guess.models.outcome import NO_ANSWER, Answer, Outcome
from classification_guess.monitoring.metrics import (
    classification_headers_added_total,
    classification_outcomes_total,
)


logger = structlog.get_logger(__name__)


class GuessClassificationStage:
    """
    Wires request building, invocation and the header mutation together.

    The stage owns the worker pool it is given by from_settings() and
    shuts it down on close().
    """

    def __init__(
        self,
        invoker: ClassificationInvoker,
        header_name: str,
        timeout_in_ms: Optional[int] = None,
        request_builder: Optional[RequestBuilder] = None,
        pool: Optional[WorkerPool] = None,
    ):
        self.invoker = invoker
        self.header_name = header_name
        self.timeout_in_ms = timeout_in_ms
        self.request_builder = request_builder or RequestBuilder()
        self._pool = pool

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        id_generator: Callable[[], UUID] = uuid.uuid4,
        http_client: Optional[httpx.Client] = None,
    ) -> "GuessClassificationStage":
        """Create the worker pool and invoker described by the settings."""
        logger.debug("init GuessClassificationStage")
        pool = WorkerPool(settings.THREAD_COUNT)
        invoker = ClassificationInvoker(
            endpoint=settings.SERVICE_URL,
            pool=pool,
            http_client=http_client,
            http_timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        logger.info(
            "Classification guess stage initialized",
            service_url=settings.SERVICE_URL,
            header_name=settings.HEADER_NAME,
            thread_count=settings.THREAD_COUNT,
            timeout_in_ms=settings.TIMEOUT_IN_MS,
        )
        return cls(
            invoker=invoker,
            header_name=settings.HEADER_NAME,
            timeout_in_ms=settings.TIMEOUT_IN_MS,
            request_builder=RequestBuilder(id_generator),
            pool=pool,
        )

    def stage_info(self) -> str:
        return "GuessClassification stage"

    def process(self, mail: Mail) -> None:
        """Add the classification guess header to the mail, when one is obtained."""
        outcome = self.classify(mail)
        if isinstance(outcome, Answer):
            self.add_header(mail, outcome.text)

    def classify(self, mail: Mail) -> Outcome:
        """Build and send the request. A request that cannot be built is never sent."""
        try:
            request = self.request_builder.build(mail)
        except SerializationError as e:
            logger.warning(
                "Could not build classification request",
                error=e.message,
                details=e.details,
            )
            classification_outcomes_total.labels(outcome="build_error").inc()
            return NO_ANSWER
        except Exception as e:
            logger.error(
                "Unexpected error while building classification request",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            classification_outcomes_total.labels(outcome="build_error").inc()
            return NO_ANSWER

        return self.invoker.invoke(request, mail.recipients, deadline_ms=self.timeout_in_ms)

    def add_header(self, mail: Mail, classification_guess: str) -> None:
        try:
            mail.add_header(self.header_name, classification_guess)
        except ValueError as e:
            logger.error(
                "Error occurred while adding classification guess header",
                header_name=self.header_name,
                error=str(e),
            )
            return
        classification_headers_added_total.inc()
        logger.debug("Added classification guess header", header_name=self.header_name)

    def close(self) -> None:
        """Wait for in-flight calls, then release the pool and HTTP client."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
        self.invoker.close()

    def __enter__(self) -> "GuessClassificationStage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
