"""Unit tests for the request and address models (wire format)."""

import json
from email.headerregistry import Address as HeaderAddress
from uuid import UUID

import pytest
from pydantic import ValidationError

from classification_guess.models.address_models import Address, RecipientSet
from classification_guess.models.request_models import ClassificationRequest


MESSAGE_ID = UUID("524e4f85-2d2f-4927-ab98-bd7a2f689773")


class TestAddress:
    """Test address normalization."""

    def test_from_pair_with_display_name(self):
        address = Address.from_header_address(("From", "from@james.org"))
        assert address == Address(name="From", address="from@james.org")

    def test_empty_display_name_is_none(self):
        address = Address.from_header_address(("", "to@james.org"))
        assert address.name is None

    def test_from_header_registry_address(self):
        entry = HeaderAddress(display_name="Jane", addr_spec="jane@example.com")
        address = Address.from_header_address(entry)
        assert address == Address(name="Jane", address="jane@example.com")

    def test_from_entries_keeps_order_and_duplicates(self):
        entries = [("", "a@x"), ("B", "b@x"), ("", "a@x")]
        addresses = Address.from_entries(entries)
        assert [a.address for a in addresses] == ["a@x", "b@x", "a@x"]

    def test_null_name_serialized(self):
        assert Address(address="to@x").model_dump_json() == '{"name":null,"address":"to@x"}'

    def test_immutable(self):
        address = Address(address="to@x")
        with pytest.raises(ValidationError):
            address.address = "other@x"


class TestRecipientSet:
    """Test recipient grouping."""

    def test_empty_channels_are_lists(self):
        assert RecipientSet().model_dump_json() == '{"to":[],"cc":[],"bcc":[]}'

    def test_all_addresses_in_channel_order(self):
        recipients = RecipientSet(
            to=[Address(address="to@x")],
            cc=[Address(address="cc@x"), Address(address="cc2@x")],
            bcc=[Address(address="bcc@x")],
        )
        assert recipients.all_addresses() == ["to@x", "cc@x", "cc2@x", "bcc@x"]


class TestClassificationRequest:
    """Test request serialization."""

    def test_empty_request_json(self):
        request = ClassificationRequest(message_id=MESSAGE_ID)
        assert request.to_json() == (
            '{"messageId":"524e4f85-2d2f-4927-ab98-bd7a2f689773",'
            '"from":[],'
            '"recipients":{"to":[],"cc":[],"bcc":[]},'
            '"subject":[""],'
            '"textBody":""}'
        )

    def test_key_order(self):
        request = ClassificationRequest(
            message_id=MESSAGE_ID,
            from_=[Address(name="From", address="from@x")],
            subject=["hi"],
            text_body="hello",
        )
        keys = list(json.loads(request.to_json()).keys())
        assert keys == ["messageId", "from", "recipients", "subject", "textBody"]

    def test_accepts_wire_names(self):
        request = ClassificationRequest.model_validate(
            {"messageId": str(MESSAGE_ID), "from": [{"name": None, "address": "a@x"}], "textBody": "t"}
        )
        assert request.from_[0].address == "a@x"
        assert request.text_body == "t"

    def test_subject_must_have_exactly_one_element(self):
        with pytest.raises(ValidationError):
            ClassificationRequest(message_id=MESSAGE_ID, subject=[])
        with pytest.raises(ValidationError):
            ClassificationRequest(message_id=MESSAGE_ID, subject=["a", "b"])

    def test_non_ascii_kept_as_utf8(self):
        request = ClassificationRequest(message_id=MESSAGE_ID, subject=["Café"])
        assert '"subject":["Café"]' in request.to_json()
