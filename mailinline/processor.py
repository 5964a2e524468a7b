import functools
import logging

from mailinline import mime
from mailinline.directives import resolve_skip, strip_directives
from mailinline.inliner import CssInliner
from mailinline.text import html_to_text

logger = logging.getLogger("mailinline")


class MessageProcessor:
    """
    Inlines the CSS of an outgoing message and keeps its text/plain
    alternative in sync.

    Processing flow:
    1. Resolve the skip_premailer / run_premailer headers, then drop them
    2. Leave messages without an HTML body alone
    3. Render a text alternative from the original HTML, unless the
       message already has one or generation is disabled
    4. Inline the CSS of the HTML body
    5. Wrap HTML and text in a multipart/alternative where the HTML was

    The message is modified in place and returned. Errors from the CSS
    inliner or the text extractor propagate to the caller.
    """

    def __init__(self, config, inliner=None, text_extractor=None):
        self.config = config
        self.inliner = inliner or CssInliner(config.premailer_options)
        self.text_extractor = text_extractor or functools.partial(
            html_to_text, line_length=config.text_line_length
        )

    def process(self, message):
        skip = resolve_skip(message, self.config.default_skip_premailer)
        strip_directives(message)

        if skip:
            logger.debug("Skipping message %s: processing disabled", message.get("Message-ID"))
            return message

        html_part = mime.find_part(message, "text/html")
        if html_part is None:
            logger.debug("Skipping message %s: no HTML body", message.get("Message-ID"))
            return message

        charset = mime.get_charset(html_part)
        transfer_encoding = mime.get_transfer_encoding(html_part)
        html = mime.read_text(html_part)

        # Render the text before inlining so it is built from the
        # document the sender wrote.
        text_part = None
        if self._should_generate_text(message):
            text_part = self._build_text_part(html, charset, transfer_encoding, message.policy)

        inlined = self.inliner.inline(html)

        if text_part is None:
            self._write_html(html_part, inlined, charset, transfer_encoding)
            return message

        if html_part is message:
            new_html_part = mime.new_text_part(
                "html",
                inlined,
                charset,
                transfer_encoding,
                policy=message.policy,
                errors="xmlcharrefreplace",
            )
            mime.make_multipart(message, "alternative", [new_html_part, text_part])
            logger.debug("Converted single-part HTML message into multipart/alternative")
        else:
            self._write_html(html_part, inlined, charset, transfer_encoding)
            alternative = mime.new_multipart(
                "alternative", [html_part, text_part], policy=message.policy
            )
            mime.replace_part(message, html_part, alternative)
            logger.debug("Replaced HTML part with multipart/alternative")

        return message

    def _should_generate_text(self, message):
        if not self.config.generate_text_part:
            return False
        return mime.find_part(message, "text/plain") is None

    def _build_text_part(self, html, source_charset, transfer_encoding, policy):
        text = self.text_extractor(html)

        preferred = self.config.output_encoding or source_charset
        charset = mime.pick_charset(text, [preferred, source_charset])
        if self.config.output_encoding and charset != self.config.output_encoding:
            logger.warning(
                "Generated text cannot be encoded as %s, using %s instead",
                self.config.output_encoding,
                charset,
            )

        return mime.new_text_part("plain", text, charset, transfer_encoding, policy=policy)

    @staticmethod
    def _write_html(part, html, charset, transfer_encoding):
        # Characters the source charset lacks become character references,
        # which leaves the rendered text unchanged.
        mime.write_text(part, html, charset, transfer_encoding, errors="xmlcharrefreplace")
