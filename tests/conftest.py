import django
from django.conf import settings
import pytest

from mailinline.conf import InlineConfig
from tests.factories import message_with_parts


def pytest_configure():
    settings.configure(
        DEBUG=True,
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": ":memory:",
            }
        },
        INSTALLED_APPS=[
            "mailinline",
        ],
        DEFAULT_CHARSET="utf-8",
        DEFAULT_FROM_EMAIL="sender@example.com",
        EMAIL_BACKEND="mailinline.backends.EmailBackend",
        MAILINLINE={
            "GENERATE_TEXT_PART": True,
            "DEFAULT_SKIP_PREMAILER": False,
            "EMAIL_BACKEND": "django.core.mail.backends.locmem.EmailBackend",
        },
        SECRET_KEY="test-secret-key-not-for-production",
    )
    django.setup()


@pytest.fixture
def config():
    return InlineConfig()


@pytest.fixture
def message():
    """A single-part text/html message."""
    return message_with_parts("html")
