"""
Path based extraction.

This module provides the PathSelect strategy, which returns the text of the
nodes matched by an XPath expression.
"""

import logging
from typing import List

from lxml import etree
from lxml.html import HtmlElement

from leto.errors import InvalidPathError, PathNotFoundError
from leto.parsers.base import ExtractionStrategy, clean_text, inner_text, join_sections

logger = logging.getLogger(__name__)


class PathSelect(ExtractionStrategy):
    """
    Selects nodes by XPath.

    With ``select_all`` unset the first match in document order wins, even
    when the path matches several nodes. With it set, every match is joined
    into paragraph separated sections.
    """

    def __init__(self, path: str, select_all: bool = False):
        self.path = path
        self.select_all = select_all

    def _select(self, doc: HtmlElement) -> List[str]:
        """Evaluates the path and returns the text of each match."""
        if not self.path or not self.path.strip():
            raise InvalidPathError(self.path, "Path is empty")

        try:
            result = doc.xpath(self.path)
        except etree.XPathError as e:
            raise InvalidPathError(
                self.path, f"Invalid path {self.path!r}: {e}"
            ) from e

        # Expressions such as count() evaluate to a number, not to nodes
        if not isinstance(result, list):
            raise InvalidPathError(
                self.path, f"Path {self.path!r} does not select nodes"
            )

        texts = []
        for item in result:
            if isinstance(item, etree._Element):  # pylint: disable=protected-access
                texts.append(inner_text(item))
            elif isinstance(item, str):
                texts.append(clean_text(item))
        return texts

    def extract(self, doc: HtmlElement) -> str:
        matches = self._select(doc)
        if not matches:
            raise PathNotFoundError(self.path)

        if not self.select_all:
            if len(matches) > 1:
                logger.debug(
                    "Path %s matched %d nodes, using the first.", self.path, len(matches)
                )
            return matches[0]

        return join_sections(matches)
