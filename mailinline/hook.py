"""
Entry points called once per outgoing message.

``delivering_email`` runs right before a message is handed to the
transport, ``previewing_email`` when a message is rendered for preview.
Both are the same function as ``perform``.
"""

from mailinline.conf import get_config
from mailinline.processor import MessageProcessor


def perform(message, config=None):
    """
    Process *message* in place and return it.

    Args:
        message: An ``email.message.Message`` about to be sent or shown.
        config: An InlineConfig. Defaults to a snapshot of the current
            Django settings.

    Raises:
        ConflictingDirectives: If both directive headers are set.
    """
    if config is None:
        config = get_config()
    return MessageProcessor(config).process(message)


delivering_email = perform
previewing_email = perform
