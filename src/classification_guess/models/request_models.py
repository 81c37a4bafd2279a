"""
Request body sent to the classification service.

Key order and null-vs-absent semantics are part of the wire format:

{"messageId":"<uuid>","from":[...],"recipients":{"to":[],"cc":[],"bcc":[]},
 "subject":["<subject>"],"textBody":"<text>"}

Some consumers compare bodies textually, so fields are declared in wire
order and always emitted.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from classification_guess.models.address_models import Address, RecipientSet


class ClassificationRequest(BaseModel):
    """
    Canonical record of the relevant parts of one email.

    message_id identifies the request, not the email: it is generated per
    request and never derived from message content.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    message_id: UUID = Field(..., alias="messageId", description="Request identifier")
    from_: list[Address] = Field(default_factory=list, alias="from")
    recipients: RecipientSet = Field(default_factory=RecipientSet)
    subject: list[str] = Field(
        default_factory=lambda: [""],
        min_length=1,
        max_length=1,
        description="Exactly one subject string, possibly empty",
    )
    text_body: str = Field(default="", alias="textBody", description="Primary text content")

    def to_json(self) -> str:
        """Serialize to compact JSON using the wire field names."""
        return self.model_dump_json(by_alias=True)
