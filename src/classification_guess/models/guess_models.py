"""
Expected response shape of the classification service.

The stage never decodes the service answer: the header value is the raw
response body. This model is provided for downstream consumers reading
the header back.
"""

from pydantic import BaseModel, ConfigDict, Field


class ClassificationGuess(BaseModel):
    """
    Classification guess as returned by the service.

    Wire shape: {"mailboxId": "<uuid>", "mailboxName": "<string>", "confidence": <float>}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mailbox_id: str = Field(..., alias="mailboxId", description="Target mailbox identifier")
    mailbox_name: str = Field(..., alias="mailboxName", description="Target mailbox name")
    confidence: float = Field(..., description="Service confidence score")

    @classmethod
    def from_header_value(cls, value: str) -> "ClassificationGuess":
        """
        Parse a header value written by the stage.

        Raises:
            pydantic.ValidationError: when the value is not a guess document
        """
        return cls.model_validate_json(value)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
