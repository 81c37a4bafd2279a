"""
Mail object handed to the stage by the hosting pipeline.

The stage only needs read access to the structured fields (senders,
recipient channels, subject, raw MIME bytes) and one mutation: appending
a header.
"""

from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import getaddresses
from typing import Any, Iterable, Optional


RECIPIENT_CHANNELS = ("to", "cc", "bcc")


class Mail:
    """
    An in-flight email plus its envelope recipients.

    Envelope recipients default to the header recipients of all channels
    combined when the pipeline does not provide them.
    """

    def __init__(self, message: Message, recipients: Optional[Iterable[str]] = None):
        self._message = message
        self._recipients = list(recipients) if recipients is not None else None

    @classmethod
    def from_bytes(cls, raw: bytes, recipients: Optional[Iterable[str]] = None) -> "Mail":
        """Parse raw RFC 5322 bytes into a Mail."""
        message = BytesParser(policy=policy.default).parsebytes(raw)
        return cls(message, recipients)

    @property
    def message(self) -> Message:
        return self._message

    @property
    def subject(self) -> Optional[str]:
        value = self._message.get("Subject")
        return None if value is None else str(value)

    @property
    def recipients(self) -> list[str]:
        if self._recipients is not None:
            return list(self._recipients)
        return [
            address
            for channel in RECIPIENT_CHANNELS
            for _, address in self.channel(channel)
        ]

    def senders(self) -> list[tuple[str, str]]:
        return self._header_addresses("From")

    def channel(self, name: str) -> list[tuple[str, str]]:
        """(display name, address) pairs of one recipient channel."""
        if name.lower() not in RECIPIENT_CHANNELS:
            raise ValueError(f"Unknown recipient channel: {name}")
        return self._header_addresses(name)

    def as_bytes(self) -> bytes:
        """Re-materialize the message as raw MIME bytes."""
        return self._message.as_bytes()

    def add_header(self, name: str, value: str) -> None:
        """
        Append a header field. Existing fields with the same name are kept.

        Raises:
            ValueError: when the message model refuses the value
        """
        self._message[name] = value

    def get_all(self, name: str) -> list[str]:
        return [str(value) for value in self._message.get_all(name, [])]

    def _header_addresses(self, name: str) -> list[tuple[str, str]]:
        entries: list[tuple[str, str]] = []
        for header in self._message.get_all(name, []):
            addresses: Any = getattr(header, "addresses", None)
            if addresses is None:
                pairs = getaddresses([str(header)])
            else:
                pairs = [(a.display_name, a.addr_spec) for a in addresses]
            entries.extend((display, address) for display, address in pairs if address)
        return entries

    def __repr__(self) -> str:
        return f"Mail(subject={self.subject!r}, recipients={self.recipients!r})"

