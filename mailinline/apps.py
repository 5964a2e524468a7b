import logging

from django.apps import AppConfig

logger = logging.getLogger("mailinline")


class MailInlineConfig(AppConfig):
    name = "mailinline"
    verbose_name = "Mail CSS Inlining"

    def ready(self):
        from mailinline.conf import get_config

        # Fail at startup rather than on the first delivery
        config = get_config()
        logger.debug("mailinline ready: %r", config)
