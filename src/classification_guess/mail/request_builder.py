"""
Builds the classification request for one mail.

Extraction and serialization run synchronously on the caller thread,
before anything is submitted to the worker pool.
"""

import uuid
from email import errors, policy
from email.message import Message
from email.parser import BytesParser
from typing import Callable, Iterable, Iterator
from uuid import UUID

import structlog

from classification_guess.exceptions import SerializationError
from classification_guess.mail.content_extractor import extract_primary_text
from classification_guess.mail.mail import Mail
from classification_guess.models.address_models import Address, RecipientSet
from classification_guess.models.request_models import ClassificationRequest


logger = structlog.get_logger(__name__)

# Defects meaning the MIME structure itself is broken (truncated or invalid)
STRUCTURAL_DEFECTS = (
    errors.StartBoundaryNotFoundDefect,
    errors.CloseBoundaryNotFoundDefect,
    errors.MultipartInvariantViolationDefect,
    errors.NoBoundaryInMultipartDefect,
)


def content_parts(part: Message) -> Iterator[Message]:
    """
    Yield the part and the descendants making up the message content.

    Attachments and embedded messages (message/*) below the root are not
    entered: the content extractor ignores them too.
    """
    yield part
    if not part.is_multipart():
        return
    for child in part.get_payload():
        if child.get_content_disposition() == "attachment":
            continue
        if child.get_content_maintype() == "message":
            continue
        yield from content_parts(child)


def structural_defects(messages: Iterable[Message]) -> list[str]:
    return [
        type(defect).__name__
        for message in messages
        for part in content_parts(message)
        for defect in part.defects
        if isinstance(defect, STRUCTURAL_DEFECTS)
    ]


class RequestBuilder:
    """
    Turns a Mail into a ClassificationRequest.

    The request id comes from the injected generator, never from the
    message, so tests can substitute a deterministic one.
    """

    def __init__(self, id_generator: Callable[[], UUID] = uuid.uuid4):
        if not callable(id_generator):
            raise TypeError("'id_generator' is mandatory")
        self._id_generator = id_generator

    def build(self, mail: Mail) -> ClassificationRequest:
        """
        Build the request for one mail.

        Raises:
            SerializationError: the MIME content cannot be re-materialized,
                parsed or decoded, or an address header cannot be read
        """
        if mail is None:
            raise TypeError("'mail' is mandatory")

        message_id = self._id_generator()
        content_tree = self._content_tree(mail)
        senders, recipients, subject = self._headers(mail)

        return ClassificationRequest(
            message_id=message_id,
            from_=senders,
            recipients=recipients,
            subject=[subject],
            text_body=extract_primary_text(content_tree),
        )

    def to_json(self, mail: Mail) -> str:
        return self.build(mail).to_json()

    def _headers(self, mail: Mail) -> tuple[list[Address], RecipientSet, str]:
        """Senders, recipient channels and subject of the mail."""
        try:
            senders = Address.from_entries(mail.senders())
            recipients = RecipientSet(
                to=Address.from_entries(mail.channel("to")),
                cc=Address.from_entries(mail.channel("cc")),
                bcc=Address.from_entries(mail.channel("bcc")),
            )
            subject = mail.subject or ""
        except (errors.MessageError, AttributeError, IndexError, TypeError, ValueError) as e:
            # The stdlib header parser can fail on malformed address lists
            raise SerializationError(
                "Could not read message headers",
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e
        return senders, recipients, subject

    def _content_tree(self, mail: Mail) -> Message:
        """Parse the content tree again from the raw bytes of the mail."""
        try:
            raw = mail.as_bytes()
        except (errors.MessageError, LookupError, UnicodeError, ValueError) as e:
            raise SerializationError(
                "Could not re-materialize message from its source",
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        try:
            tree = BytesParser(policy=policy.default).parsebytes(raw)
        except errors.MessageError as e:
            raise SerializationError(
                "Could not parse MIME content",
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        # Generating bytes can hide a missing close boundary, so both trees count
        defects = structural_defects([mail.message, tree])
        if defects:
            raise SerializationError(
                "Invalid MIME structure",
                details={"defects": sorted(set(defects))},
            )
        return tree
