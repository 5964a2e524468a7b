import codecs
from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


DEFAULTS = {
    "GENERATE_TEXT_PART": True,
    "DEFAULT_SKIP_PREMAILER": False,
    "OUTPUT_ENCODING": None,  # Generated text inherits the HTML charset
    "PREMAILER_OPTIONS": {},
    "TEXT_LINE_LENGTH": 65,
    # Backend that actually delivers once the message has been processed
    "EMAIL_BACKEND": "django.core.mail.backends.smtp.EmailBackend",
}


def get_setting(name):
    """
    Retrieve a setting from the MAILINLINE dict in Django settings,
    falling back to DEFAULTS if not provided.
    """
    user_settings = getattr(settings, "MAILINLINE", {})
    value = user_settings.get(name, DEFAULTS.get(name))

    # Merge one level so partial option dicts keep the defaults
    if name == "PREMAILER_OPTIONS" and isinstance(value, dict):
        return {**DEFAULTS["PREMAILER_OPTIONS"], **value}

    return value


@dataclass(frozen=True)
class InlineConfig:
    """
    Snapshot of the settings a single processing run depends on.
    """

    generate_text_part: bool = True
    default_skip_premailer: bool = False
    output_encoding: Optional[str] = None
    premailer_options: dict = field(default_factory=dict)
    text_line_length: int = 65


def get_config():
    """
    Build an InlineConfig from the current Django settings.

    Raises ImproperlyConfigured if OUTPUT_ENCODING is not a codec Python
    knows about.
    """
    output_encoding = get_setting("OUTPUT_ENCODING")
    if output_encoding:
        try:
            codecs.lookup(output_encoding)
        except LookupError:
            raise ImproperlyConfigured(
                f"Unknown MAILINLINE OUTPUT_ENCODING: '{output_encoding}'."
            )

    return InlineConfig(
        generate_text_part=bool(get_setting("GENERATE_TEXT_PART")),
        default_skip_premailer=bool(get_setting("DEFAULT_SKIP_PREMAILER")),
        output_encoding=output_encoding or None,
        premailer_options=get_setting("PREMAILER_OPTIONS"),
        text_line_length=int(get_setting("TEXT_LINE_LENGTH")),
    )
