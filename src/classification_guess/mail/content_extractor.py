"""
Primary text extraction from a MIME content tree.

The primary text is the single textual representation of an email body
sent for classification:

1. the first non-attachment text/plain body, when present and non-empty
2. otherwise the first non-attachment text/html body, verbatim (tags kept)
3. otherwise the empty string

Plain text wins over HTML regardless of where each sits in the tree.
"""

from dataclasses import dataclass
from email.message import Message
from typing import Iterator, Optional

import structlog

from classification_guess.exceptions import SerializationError


logger = structlog.get_logger(__name__)

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"


@dataclass(frozen=True)
class MessageContent:
    """Text and HTML candidates found in a content tree."""

    text_body: Optional[str] = None
    html_body: Optional[str] = None

    def primary_text(self) -> str:
        if self.text_body:
            return self.text_body
        return self.html_body or ""


def iter_body_parts(part: Message) -> Iterator[Message]:
    """
    Yield leaf body parts in document order.

    Attachments are skipped, and so are embedded messages (message/*):
    their bodies belong to another email.
    """
    if part.get_content_disposition() == "attachment":
        return
    if part.get_content_maintype() == "message":
        return
    if part.is_multipart():
        for child in part.get_payload():
            yield from iter_body_parts(child)
    else:
        yield part


def first_body_of_type(root: Message, content_type: str) -> Optional[Message]:
    for part in iter_body_parts(root):
        if part.get_content_type() == content_type:
            return part
    return None


def decode_text(part: Message) -> str:
    """
    Decode a text part using its declared charset (ASCII when absent).

    Raises:
        SerializationError: unknown charset or undecodable payload
    """
    charset = part.get_content_charset() or "us-ascii"
    try:
        payload = part.get_payload(decode=True) or b""
        return payload.decode(charset, errors="replace")
    except LookupError as e:
        raise SerializationError(
            f"Unknown charset in {part.get_content_type()} part: {charset}",
            details={"charset": charset, "content_type": part.get_content_type()},
        ) from e
    except (ValueError, TypeError) as e:
        raise SerializationError(
            f"Could not decode {part.get_content_type()} part",
            details={"error": str(e), "content_type": part.get_content_type()},
        ) from e


def find_text_bodies(root: Message) -> MessageContent:
    """Decode the first text/plain and, when needed, the first text/html body."""
    text_part = first_body_of_type(root, TEXT_PLAIN)
    text_body = decode_text(text_part) if text_part is not None else None
    if text_body:
        return MessageContent(text_body=text_body)

    html_part = first_body_of_type(root, TEXT_HTML)
    html_body = decode_text(html_part) if html_part is not None else None
    return MessageContent(text_body=text_body, html_body=html_body)


def extract_primary_text(root: Message) -> str:
    """Primary text of a content tree, "" when it has no usable body."""
    content = find_text_bodies(root)
    logger.debug(
        "Extracted message content",
        has_text=content.text_body is not None,
        has_html=content.html_body is not None,
    )
    return content.primary_text()
