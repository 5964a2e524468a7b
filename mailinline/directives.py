"""
Per-message directive headers.

A sender can opt a single message in or out of processing::

    EmailMessage(..., headers={"skip_premailer": "true"})
    EmailMessage(..., headers={"run_premailer": "true"})

Only the presence of a header matters, not its value. Both headers are
consumed so they never reach the transport.
"""

from mailinline.exceptions import ConflictingDirectives

SKIP_HEADERS = ("skip_premailer", "skip-premailer")
RUN_HEADERS = ("run_premailer", "run-premailer")


def _has_any(message, names):
    return any(name in message for name in names)


def resolve_skip(message, default_skip=False):
    """
    Decide whether *message* should be left alone.

    Does not modify the message, so a conflict leaves it untouched.

    Raises:
        ConflictingDirectives: If both a skip and a run header are set.
    """
    skip = _has_any(message, SKIP_HEADERS)
    run = _has_any(message, RUN_HEADERS)

    if skip and run:
        raise ConflictingDirectives()
    if run:
        return False
    if skip:
        return True
    return bool(default_skip)


def strip_directives(message):
    """Remove every spelling of both directive headers."""
    for name in SKIP_HEADERS + RUN_HEADERS:
        del message[name]
