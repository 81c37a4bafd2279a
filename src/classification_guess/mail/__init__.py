"""
Mail access and request building.

Components:
- Mail: wrapper around the in-flight message (read access + header append)
- content_extractor: primary text selection over the MIME tree
- RequestBuilder: Mail -> ClassificationRequest
"""

from classification_guess.mail.content_extractor import (
    MessageContent,
    extract_primary_text,
    find_text_bodies,
)
from classification_guess.mail.mail import Mail
from classification_guess.mail.request_builder import RequestBuilder

__all__ = [
    "Mail",
    "MessageContent",
    "RequestBuilder",
    "extract_primary_text",
    "find_text_bodies",
]
