"""
Delivery through mailinline.backends.EmailBackend wrapping Django's
locmem backend.
"""

import copy
import warnings

import pytest
from django.core import mail
from django.core.exceptions import ImproperlyConfigured

from mailinline import mime
from mailinline.backends import EmailBackend, InlinedEmailMessage
from mailinline.exceptions import ConflictingDirectives
from tests.factories import EmailFactory, email_with_parts


@pytest.fixture
def connection(settings):
    settings.MAILINLINE = {"EMAIL_BACKEND": "django.core.mail.backends.locmem.EmailBackend"}
    return mail.get_connection("mailinline.backends.EmailBackend")


class TestEmailBackend:
    def test_wraps_the_configured_backend(self, connection):
        assert isinstance(connection, EmailBackend)
        assert connection.backend.__class__.__module__ == "django.core.mail.backends.locmem"

    def test_delivered_message_is_processed(self, connection, mailoutbox):
        sent = EmailFactory(connection=connection).send()

        assert sent == 1
        assert len(mailoutbox) == 1
        message = mailoutbox[0].message()
        assert message.get_content_type() == "multipart/alternative"
        assert "<p style=" in mime.read_text(mime.find_part(message, "text/html"))
        assert mime.find_part(message, "text/plain") is not None

    def test_original_attributes_are_forwarded(self, connection, mailoutbox):
        EmailFactory(subject="Hello there", connection=connection).send()

        delivered = mailoutbox[0]
        assert delivered.subject == "Hello there"
        assert delivered.to == ["recipient@example.com"]
        assert delivered.recipients() == ["recipient@example.com"]

    def test_attachments_survive_delivery(self, connection, mailoutbox):
        email_with_parts("html", "attachment", connection=connection).send()

        message = mailoutbox[0].message()
        parts = message.get_payload()
        assert message.get_content_type() == "multipart/mixed"
        assert parts[0].get_content_type() == "multipart/alternative"
        assert parts[-1].get_content_type() == "image/png"

    def test_skip_header_is_honoured_and_stripped(self, connection, mailoutbox):
        EmailFactory(headers={"skip_premailer": "1"}, connection=connection).send()

        message = mailoutbox[0].message()
        assert message.get_content_type() == "text/html"
        assert "skip_premailer" not in message
        assert b"skip_premailer" not in message.as_bytes()

    def test_default_skip_with_run_header(self, settings, connection, mailoutbox):
        settings.MAILINLINE = {
            "EMAIL_BACKEND": "django.core.mail.backends.locmem.EmailBackend",
            "DEFAULT_SKIP_PREMAILER": True,
        }

        EmailFactory(connection=connection).send()
        EmailFactory(headers={"run_premailer": "1"}, connection=connection).send()

        assert mailoutbox[0].message().get_content_type() == "text/html"
        assert mailoutbox[1].message().get_content_type() == "multipart/alternative"

    def test_conflicting_headers_raise(self, connection):
        email_message = EmailFactory(
            headers={"skip_premailer": "1", "run_premailer": "1"},
            connection=connection,
        )

        with pytest.raises(ConflictingDirectives):
            email_message.send()

    def test_builds_without_deprecation_warnings(self, settings):
        settings.MAILINLINE = {"EMAIL_BACKEND": "django.core.mail.backends.locmem.EmailBackend"}

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            warnings.simplefilter("error", PendingDeprecationWarning)
            mail.get_connection("mailinline.backends.EmailBackend", fail_silently=True)

    def test_no_messages(self, connection):
        assert connection.send_messages([]) == 0

    def test_refuses_to_wrap_itself(self, settings):
        settings.MAILINLINE = {"EMAIL_BACKEND": "mailinline.backends.EmailBackend"}

        with pytest.raises(ImproperlyConfigured):
            mail.get_connection("mailinline.backends.EmailBackend")


class TestInlinedEmailMessage:
    def test_message_is_processed_each_time(self):
        wrapped = InlinedEmailMessage(EmailFactory())

        assert wrapped.message().get_content_type() == "multipart/alternative"
        assert wrapped.message().get_content_type() == "multipart/alternative"

    def test_wrapped_message_is_untouched(self):
        email_message = EmailFactory()

        InlinedEmailMessage(email_message).message()

        assert email_message.message().get_content_type() == "text/html"

    def test_can_be_deep_copied(self):
        wrapped = InlinedEmailMessage(EmailFactory(subject="Copied"))

        duplicate = copy.deepcopy(wrapped)

        assert duplicate.subject == "Copied"
        assert duplicate.message().get_content_type() == "multipart/alternative"
