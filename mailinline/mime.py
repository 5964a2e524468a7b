"""
Helpers over the standard library ``email`` object model.

Everything here sticks to the ``email.message.Message`` API shared by the
legacy MIME classes (Django's ``SafeMIMEText`` and friends) and the modern
``email.message.EmailMessage``, so both kinds of message can be processed.
"""

import codecs
from email import encoders
from email.message import Message

DEFAULT_CHARSET = "utf-8"

# Octets per line, excluding CRLF
RFC5322_LINE_LENGTH_LIMIT = 998

TRANSFER_ENCODERS = {
    "base64": encoders.encode_base64,
    "quoted-printable": encoders.encode_quopri,
}


def iter_parts(message):
    """
    Depth-first walk over *message* and the parts of nested multipart
    containers. Attached messages (message/rfc822) are not descended into.
    """
    yield message
    if message.is_multipart() and message.get_content_maintype() == "multipart":
        for part in message.get_payload():
            yield from iter_parts(part)


def is_attachment(part) -> bool:
    return part.get_content_disposition() == "attachment"


def find_part(message, content_type):
    """
    Return the first non-attachment part of *content_type*, or None.

    The message itself is returned when its own type matches.
    """
    for part in iter_parts(message):
        if part.get_content_type() == content_type and not is_attachment(part):
            return part
    return None


def get_charset(part) -> str:
    """Declared charset of *part*, or UTF-8 when absent or unknown."""
    charset = part.get_content_charset()
    if not charset:
        return DEFAULT_CHARSET
    try:
        codecs.lookup(charset)
    except LookupError:
        return DEFAULT_CHARSET
    return charset


def get_transfer_encoding(part):
    value = part.get("Content-Transfer-Encoding")
    if value is None:
        return None
    return str(value).strip().lower()


def read_text(part) -> str:
    """Payload of *part* decoded through its transfer and character encodings."""
    payload = part.get_payload(decode=True) or b""
    return payload.decode(get_charset(part), "replace")


def write_text(part, text, charset, transfer_encoding=None, errors="strict"):
    """
    Replace the payload of a single-part *part* with *text*.

    The text is encoded in *charset* and then with *transfer_encoding*;
    unknown or identity encodings become 7bit or 8bit depending on the
    bytes produced, or quoted-printable when a line is too long for SMTP.
    """
    data = text.encode(charset, errors)
    if transfer_encoding not in TRANSFER_ENCODERS and _has_long_lines(data):
        transfer_encoding = "quoted-printable"

    del part["Content-Transfer-Encoding"]
    part.set_payload(data)
    part.set_param("charset", charset)
    encode = TRANSFER_ENCODERS.get(transfer_encoding, encoders.encode_7or8bit)
    encode(part)


def _has_long_lines(data):
    return any(len(line) > RFC5322_LINE_LENGTH_LIMIT for line in data.splitlines())


def pick_charset(text, candidates):
    """
    Return the first charset in *candidates* that can encode *text*.

    Falls back to UTF-8, which encodes everything.
    """
    for charset in candidates:
        if not charset:
            continue
        try:
            text.encode(charset)
        except (UnicodeEncodeError, LookupError):
            continue
        return charset
    return DEFAULT_CHARSET


def new_text_part(subtype, text, charset, transfer_encoding=None, policy=None, errors="strict"):
    part = Message() if policy is None else Message(policy=policy)
    part["Content-Type"] = f"text/{subtype}"
    write_text(part, text, charset, transfer_encoding, errors)
    return part


def new_multipart(subtype, parts, policy=None):
    container = Message() if policy is None else Message(policy=policy)
    container["Content-Type"] = f"multipart/{subtype}"
    for part in parts:
        container.attach(part)
    return container


def make_multipart(message, subtype, parts):
    """
    Turn the single-part *message* into a multipart/<subtype> in place,
    keeping every header that is not about the old body.
    """
    # Replacing first keeps the header in place and in its original case
    message.replace_header("Content-Type", f"multipart/{subtype}")
    message.set_charset(None)
    del message["Content-Transfer-Encoding"]
    message.set_payload(list(parts))


def replace_part(container, old, new) -> bool:
    """
    Put *new* where *old* sits anywhere below *container*.

    Returns True if *old* was found.
    """
    if not container.is_multipart() or container.get_content_maintype() != "multipart":
        return False

    payload = container.get_payload()
    for index, part in enumerate(payload):
        if part is old:
            payload[index] = new
            return True

    return any(replace_part(part, old, new) for part in payload)
