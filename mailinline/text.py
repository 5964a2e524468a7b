"""
Plain-text rendering of HTML email bodies.

The output is meant for the text/plain alternative of a message, so it
favours readability in a mail client over fidelity: links keep their
target next to the label, headings are underlined and everything is
wrapped to a fixed width.
"""

import re
import textwrap

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

REMOVED_TAGS = ["head", "style", "script", "title", "meta", "link", "noscript"]

BLOCK_TAGS = [
    "p", "div", "table", "tr", "ul", "ol", "dl", "dt", "dd", "blockquote",
    "pre", "hr", "address", "center", "section", "article", "header",
    "footer", "form", "fieldset",
]

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

_WHITESPACE_RE = re.compile(r"\s+")


def _squash(value):
    return " ".join(value.split())


def _render_link(link):
    href = (link.get("href") or "").strip()
    label = _squash(link.get_text(" "))

    if not href or href.startswith("#"):
        return label
    if href.lower().startswith("mailto:") and label == href[7:]:
        return label
    if not label or label == href:
        return href
    return f"{label} ( {href} )"


def _render_heading(heading, line_length):
    text = _squash(heading.get_text(" "))
    if not text:
        return "\n\n"

    level = int(heading.name[1])
    if level <= 2:
        text = text.upper()
    marker = "*" if level == 1 else "-"
    underline = marker * min(len(text), line_length)
    return f"\n\n{text}\n{underline}\n\n"


def _wrap(line, line_length):
    return textwrap.wrap(
        line,
        width=line_length,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [line]


def html_to_text(html: str, line_length: int = 65) -> str:
    """
    Render *html* as wrapped plain text.

    Args:
        html: The HTML document or fragment.
        line_length: Maximum width of a line. Words and URLs longer than
            this are kept whole.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    for tag in soup(REMOVED_TAGS):
        tag.extract()
    # Comments, doctypes and other declarations
    for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()

    # Source whitespace carries no meaning outside <pre>, only the
    # newlines inserted below do.
    for string in soup.find_all(string=True):
        if string.find_parent("pre") is None:
            string.replace_with(_WHITESPACE_RE.sub(" ", string))

    for image in soup("img"):
        image.replace_with(image.get("alt", ""))
    for link in soup("a"):
        link.replace_with(_render_link(link))
    for heading in soup(HEADING_TAGS):
        heading.replace_with(_render_heading(heading, line_length))
    for br in soup("br"):
        br.replace_with("\n")
    for item in soup("li"):
        item.insert(0, "* ")
        item.insert_before("\n")
    for cell in soup(["td", "th"]):
        cell.insert_after(" ")
    for block in soup(BLOCK_TAGS):
        block.insert_before("\n\n")
        block.insert_after("\n\n")

    root = soup.body or soup
    lines = [_squash(line) for line in root.get_text().splitlines()]

    output = []
    previous_blank = True
    for line in lines:
        if not line:
            if not previous_blank:
                output.append("")
            previous_blank = True
            continue
        output.extend(_wrap(line, line_length))
        previous_blank = False

    return "\n".join(output).strip()
