"""
Website content extraction.

This module provides the ContentExtractor class, which fetches a web page,
parses it into a document tree and turns it into a title and a body text
using one of the extraction strategies.
"""

import asyncio
import logging
from typing import Optional, Tuple

import lxml.html
import requests
from lxml import etree
from lxml.html import HtmlElement

from leto.config import FETCH_TIMEOUT, USER_AGENT
from leto.errors import FetchError, ParseError, ScrapingError
from leto.models import ExtractionMethod, ExtractionRequest
from leto.parsers.article import LargestArticleSubsection
from leto.parsers.base import ExtractionStrategy
from leto.parsers.xpath import PathSelect

logger = logging.getLogger(__name__)


def strategy_for(request: ExtractionRequest) -> ExtractionStrategy:
    """Returns the strategy implementing the request's extraction method."""
    if request.method == ExtractionMethod.LARGEST_ARTICLE_SUBSECTION:
        return LargestArticleSubsection()
    if request.method == ExtractionMethod.PATH_SELECT:
        options = request.path_select_options
        return PathSelect(options.path, options.select_all)
    raise ScrapingError(f"Invalid extraction method: {request.method!r}")


class ContentExtractor:
    """Fetches web pages and extracts readable text from them."""

    def __init__(
        self, timeout: Optional[float] = None, user_agent: Optional[str] = None
    ):
        self.timeout = timeout or FETCH_TIMEOUT
        self.user_agent = user_agent or USER_AGENT

    def _fetch(self, url: str) -> bytes:
        """Downloads the raw page."""
        try:
            resp = requests.get(
                url, timeout=self.timeout, headers={"User-Agent": self.user_agent}
            )
            resp.raise_for_status()
        except requests.RequestException as req_err:
            logger.error("Network error fetching %s: %s", url, req_err)
            raise FetchError(f"Could not fetch {url}: {req_err}") from req_err
        return resp.content

    def _parse(self, url: str, content: bytes) -> HtmlElement:
        """Parses raw markup into a document tree."""
        try:
            return lxml.html.document_fromstring(content)
        except (etree.LxmlError, ValueError) as e:
            logger.error("Error parsing %s: %s", url, e)
            raise ParseError(f"Could not parse {url}: {e}") from e

    def load_sync(self, url: str) -> HtmlElement:
        return self._parse(url, self._fetch(url))

    async def load(self, url: str) -> HtmlElement:
        """Fetches and parses the page without blocking the event loop."""
        return await asyncio.to_thread(self.load_sync, url)

    def extract_title(self, doc: HtmlElement) -> str:
        """Returns the document's declared title, or an empty string."""
        title = doc.find(".//title")
        if title is None:
            return ""
        return " ".join(title.text_content().split())

    def extract_largest_article_subsection(self, doc: HtmlElement) -> str:
        return LargestArticleSubsection().extract(doc)

    def extract_by_path(self, doc: HtmlElement, path: str, select_all: bool) -> str:
        return PathSelect(path, select_all).extract(doc)

    async def extract(self, request: ExtractionRequest) -> Tuple[str, str]:
        """Fetches the requested page and returns its (title, body)."""
        strategy = strategy_for(request)
        doc = await self.load(request.url)

        title = self.extract_title(doc)
        body = strategy.extract(doc)
        logger.info(
            "Extracted %d chars from %s using %s.",
            len(body),
            request.url,
            type(strategy).__name__,
        )
        return title, body
