class MailInlineError(Exception):
    """Base class for errors raised by mailinline itself."""


class ConflictingDirectives(MailInlineError):
    """
    Raised when a message carries both the skip_premailer and the
    run_premailer header. This is a caller error: the message is left
    exactly as it was received.
    """

    def __init__(self, message="Message has both skip_premailer and run_premailer headers set."):
        super().__init__(message)
