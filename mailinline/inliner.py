import logging

from premailer import Premailer

logger = logging.getLogger("mailinline")


class CssInliner:
    """
    Moves the CSS of an HTML document into ``style`` attributes.

    The heavy lifting is done by premailer; *options* are passed straight
    to ``premailer.Premailer`` (e.g. ``base_url``, ``keep_style_tags``,
    ``strip_important``). Errors raised by premailer are not caught.
    """

    def __init__(self, options=None):
        self.options = dict(options or {})

    def inline(self, html: str) -> str:
        # premailer cannot parse an empty document
        if not html.strip():
            return html
        logger.debug("Inlining CSS into %d characters of HTML", len(html))
        return Premailer(html, **self.options).transform()
