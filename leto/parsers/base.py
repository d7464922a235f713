"""
Base classes and helpers for extraction strategies.

This module defines the contract every extraction strategy follows, and the
text helpers they share for turning HTML nodes into readable text.
"""

import re
from typing import Iterable, List, Protocol, Union

from lxml.html import HtmlElement

_SKIP_TAGS = {"script", "style", "noscript", "template", "head", "iframe", "svg"}

_BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl",
    "dt", "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "td", "th", "tr", "ul",
}


class ExtractionStrategy(Protocol):
    """
    Protocol for extraction strategies.

    Classes implementing this protocol pick the body text out of a parsed
    web page.
    """

    def extract(self, doc: HtmlElement) -> str:
        """Returns the body text of the document."""


def clean_text(text: str) -> str:
    """Collapses whitespace inside lines and runs of blank lines."""
    lines = [re.sub(r"\s+", " ", line).strip() for line in text.split("\n")]
    cleaned_lines: List[str] = []
    prev_blank = False
    for line in lines:
        if not line:
            if not prev_blank:
                cleaned_lines.append("")
            prev_blank = True
        else:
            cleaned_lines.append(line)
            prev_blank = False
    return "\n".join(cleaned_lines).strip()


def inner_text(node: HtmlElement) -> str:
    """Visible text of a node, block elements on their own lines."""
    parts: List[str] = []
    stack: List[Union[HtmlElement, str]] = [node]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        # Comments and processing instructions have a non-string tag
        if not isinstance(item.tag, str):
            continue
        tag = item.tag.lower()
        if tag in _SKIP_TAGS:
            continue

        separator = "\n" if tag in _BLOCK_TAGS else ""
        parts.append(separator)
        if item.text:
            parts.append(item.text)

        stack.append(separator)
        for child in reversed(item):
            if child.tail:
                stack.append(child.tail)
            stack.append(child)

    return clean_text("".join(parts))


def join_sections(sections: Iterable[str]) -> str:
    """Joins sections with a blank line between each."""
    return "\n\n".join(sections)
