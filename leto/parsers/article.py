"""
Heuristic article detection.

This module provides the LargestArticleSubsection strategy, which guesses the
main content of a page by comparing how much visible text each candidate
container holds.
"""

import logging
from typing import Callable, Sequence, Tuple

from lxml.html import HtmlElement

from leto.errors import NoContentFoundError
from leto.parsers.base import ExtractionStrategy, clean_text, inner_text

logger = logging.getLogger(__name__)

_LAYOUT_TAGS = ("div", "td")


def _own_text(node: HtmlElement) -> str:
    """Text of a node, leaving out what nested layout containers hold."""
    parts = [node.text or ""]
    for child in node:
        # Comments and processing instructions have a non-string tag
        if isinstance(child.tag, str) and child.tag.lower() not in _LAYOUT_TAGS:
            parts.append(inner_text(child))
        parts.append(child.tail or "")
    return clean_text(" ".join(parts))


class LargestArticleSubsection(ExtractionStrategy):
    """Picks the container with the most visible text."""

    # Searched in order; the first tier holding any text wins. Layout
    # containers are scored by their own text so that wrappers don't win.
    CANDIDATE_TIERS: Sequence[Tuple[Tuple[str, ...], Callable[[HtmlElement], str]]] = (
        (("article",), inner_text),
        (("main", "section"), inner_text),
        (_LAYOUT_TAGS, _own_text),
        (("body",), inner_text),
    )

    def extract(self, doc: HtmlElement) -> str:
        """Returns the text of the largest candidate, first in document order on ties."""
        for tags, score_text in self.CANDIDATE_TIERS:
            best = None
            best_score = 0
            candidates = 0
            for node in doc.iter(*tags):
                candidates += 1
                score = len(score_text(node))
                if score > best_score:
                    best, best_score = node, score

            if best is not None:
                text = inner_text(best)
                logger.debug(
                    "Selected largest <%s> out of %d candidates (%d chars).",
                    "/".join(tags),
                    candidates,
                    len(text),
                )
                return text

        raise NoContentFoundError("No text found on the page")
