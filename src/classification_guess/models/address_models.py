"""
Address models for the classification request.

An Address is the serializable form of one mail address entry. A
RecipientSet groups the recipient addresses of a message by channel.
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """
    Normalized mail address: display name plus address.

    Serialized as {"name": <string|null>, "address": "<string>"} in that
    key order. A missing or empty display name is always None.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = Field(default=None, description="Display name, null when absent")
    address: str = Field(..., description="Address as written in the header (addr-spec)")

    @classmethod
    def from_header_address(cls, entry: Any) -> "Address":
        """
        Build from one source address entry.

        Accepts an email.headerregistry.Address or a (name, address) pair
        as returned by email.utils.getaddresses.
        """
        if isinstance(entry, tuple):
            name, address = entry
        else:
            name, address = entry.display_name, entry.addr_spec
        return cls(name=name or None, address=address)

    @classmethod
    def from_entries(cls, entries: Iterable[Any]) -> list["Address"]:
        """Map entries 1:1, keeping order and duplicates."""
        return [cls.from_header_address(entry) for entry in entries]


class RecipientSet(BaseModel):
    """
    Recipients of a message grouped by channel.

    Every channel is always present; an empty channel is an empty list.
    Order and duplicates within each channel are those of the source header.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    to: list[Address] = Field(default_factory=list)
    cc: list[Address] = Field(default_factory=list)
    bcc: list[Address] = Field(default_factory=list)

    def all_addresses(self) -> list[str]:
        """Addresses of all channels combined, in to, cc, bcc order."""
        return [a.address for a in (*self.to, *self.cc, *self.bcc)]
