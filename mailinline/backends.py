"""
Django email backend that processes messages on their way out.

Usage::

    EMAIL_BACKEND = "mailinline.backends.EmailBackend"
    MAILINLINE = {
        "EMAIL_BACKEND": "django.core.mail.backends.smtp.EmailBackend",
    }
"""

import logging

from django.core.exceptions import ImproperlyConfigured
from django.core.mail import get_connection
from django.core.mail.backends.base import BaseEmailBackend
from django.utils.module_loading import import_string

from mailinline.conf import get_setting
from mailinline.hook import delivering_email

logger = logging.getLogger("mailinline")


class InlinedEmailMessage:
    """
    Wraps a Django EmailMessage so that ``message()`` returns the MIME
    tree after processing. Everything else is read from the wrapped
    message.
    """

    def __init__(self, email_message):
        self._email_message = email_message

    def __getattr__(self, name):
        # Dunder lookups (copy, pickle) must not reach the wrapped message,
        # nor recurse while _email_message is not set yet.
        if name.startswith("__") or name == "_email_message":
            raise AttributeError(name)
        return getattr(self._email_message, name)

    def message(self, *args, **kwargs):
        return delivering_email(self._email_message.message(*args, **kwargs))

    def __repr__(self):
        return f"<InlinedEmailMessage {self._email_message!r}>"


class EmailBackend(BaseEmailBackend):
    """
    Processes every message, then delivers it through the backend named
    by MAILINLINE['EMAIL_BACKEND'].
    """

    def __init__(self, fail_silently=False, **kwargs):
        super().__init__(fail_silently=fail_silently)

        backend_path = get_setting("EMAIL_BACKEND")
        if issubclass(import_string(backend_path), EmailBackend):
            raise ImproperlyConfigured(
                f"MAILINLINE['EMAIL_BACKEND'] must name the backend that "
                f"delivers mail, not '{backend_path}'."
            )

        self.backend = get_connection(backend_path, fail_silently=fail_silently, **kwargs)

    def open(self):
        return self.backend.open()

    def close(self):
        return self.backend.close()

    def send_messages(self, email_messages):
        if not email_messages:
            return 0

        logger.debug("Processing %d message(s) before delivery", len(email_messages))
        return self.backend.send_messages(
            [InlinedEmailMessage(email_message) for email_message in email_messages]
        )
