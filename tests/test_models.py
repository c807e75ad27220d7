"""Unit tests for response models."""

import pytest

from GuerrillaMail import Attachment, EmailDetails, Message, ResponseParseError


class TestMessage:
    def test_from_dict(self, sample_message: dict) -> None:
        message = Message.from_dict(sample_message)

        assert message.mail_id == "42"
        assert message.mail_from == "sender@example.com"
        assert message.mail_read is False
        assert message.mail_date == "12:00:00"

    def test_numeric_fields_become_strings(self, sample_message: dict) -> None:
        sample_message.update(mail_id=7, mail_timestamp=1700000000, mail_read="1")

        message = Message.from_dict(sample_message)

        assert message.mail_id == "7"
        assert message.mail_timestamp == "1700000000"
        assert message.mail_read is True

    def test_boolean_read_flag(self, sample_message: dict) -> None:
        sample_message["mail_read"] = True

        assert Message.from_dict(sample_message).mail_read is True

        sample_message["mail_read"] = False

        assert Message.from_dict(sample_message).mail_read is False

    def test_optional_fields_absent(self, sample_message: dict) -> None:
        del sample_message["mail_read"]
        del sample_message["mail_date"]

        message = Message.from_dict(sample_message)

        assert message.mail_read is False
        assert message.mail_date is None

    @pytest.mark.parametrize("key", ["mail_id", "mail_from", "mail_subject", "mail_excerpt", "mail_timestamp"])
    def test_required_field_missing(self, sample_message: dict, key: str) -> None:
        del sample_message[key]

        with pytest.raises(ResponseParseError, match=key):
            Message.from_dict(sample_message)

    def test_boolean_rejected(self, sample_message: dict) -> None:
        sample_message["mail_id"] = True

        with pytest.raises(ResponseParseError):
            Message.from_dict(sample_message)

    def test_not_an_object(self) -> None:
        with pytest.raises(ResponseParseError):
            Message.from_dict(["mail_id", "42"])


class TestEmailDetails:
    def test_from_dict(self, sample_details: dict) -> None:
        details = EmailDetails.from_dict(sample_details)

        assert details.mail_recipient == "myalias"
        assert details.content_type == "text/html"
        assert details.mail_size == "2048"
        assert details.attachments == [
            Attachment(filename="invoice.pdf", content_type="application/pdf", part_id="2")
        ]

    def test_mail_size_from_fetch_payload(self) -> None:
        details = EmailDetails.from_dict({
            "mail_id": "1",
            "mail_from": "a@example.com",
            "mail_subject": "s",
            "mail_timestamp": "1700000000",
            "mail_body": "b",
            "mail_size": "300",
        })

        assert details.mail_size == "300"

    def test_mail_size_from_size_key(self, sample_details: dict) -> None:
        del sample_details["mail_size"]
        sample_details["size"] = 512

        assert EmailDetails.from_dict(sample_details).mail_size == "512"

    def test_without_attachments(self, sample_details: dict) -> None:
        sample_details["att_info"] = None

        assert EmailDetails.from_dict(sample_details).attachments == []

    def test_attachments_not_a_list(self, sample_details: dict) -> None:
        sample_details["att_info"] = {"f": "invoice.pdf"}

        with pytest.raises(ResponseParseError):
            EmailDetails.from_dict(sample_details)

    def test_attachment_without_filename(self, sample_details: dict) -> None:
        sample_details["att_info"] = [{"t": "image/png"}]

        with pytest.raises(ResponseParseError):
            EmailDetails.from_dict(sample_details)


class TestAttachment:
    def test_defaults(self) -> None:
        attachment = Attachment.from_dict({"f": "a.txt"})

        assert attachment.content_type == ""
        assert attachment.part_id == ""
