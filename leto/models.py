"""
Data models for the Leto reader.

This module defines the ReadingState entity (what is being read, how far the
reader got and where the text came from), its serialized JSON shape, and the
request type used for website extraction.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Dict, Optional, TypedDict

from leto import constants
from leto.errors import MalformedInputError, MissingFieldError, ScrapingError

if TYPE_CHECKING:
    from leto.services.web import ContentExtractor

logger = logging.getLogger(__name__)


def count_tokens(text: str) -> int:
    """Number of whitespace separated words, the unit of reading position."""
    return len(text.split())


class ReadingStateSource(IntEnum):
    """Provenance of a reading state. Serialized by ordinal."""

    NEW_BLANK = 0
    DEMO = 1
    JSON_IMPORT = 2
    WEBSITE_EXTRACT = 3
    CLIPBOARD_PASTE = 4
    FILE_UPLOAD = 5

    @classmethod
    def parse(cls, value: Any) -> "ReadingStateSource":
        """Accepts an ordinal or a member name ("WebsiteExtract", "WEBSITE_EXTRACT")."""
        if isinstance(value, bool):
            raise ValueError(f"Invalid source: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            wanted = value.replace("_", "").lower()
            for member in cls:
                if member.name.replace("_", "").lower() == wanted:
                    return member
            if value.strip().isdigit():
                return cls(int(value))
        raise ValueError(f"Invalid source: {value!r}")


class _SerializedText(TypedDict):
    Text: str


class SerializedReadingState(_SerializedText, total=False):
    """Wire shape of a saved reading state."""

    Title: str
    LastRead: str
    Source: int
    SourceDescription: Optional[str]


class ReadingState:
    """
    The document currently being read.

    ``text`` is never empty: blank text is replaced with the default
    placeholder. ``position`` counts words and is kept inside
    ``[0, count_tokens(text)]`` whenever either of them changes.
    """

    def __init__(
        self,
        title: str,
        text: str,
        source: ReadingStateSource,
        source_description: Optional[str] = None,
        last_read: Optional[datetime] = None,
    ):
        self.title = title
        self._position = 0
        self._text = ""
        self.text = text
        self.source = source
        self.source_description = source_description
        self.last_read = last_read or datetime.now()

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self._text = value if value and value.strip() else constants.DEFAULT_NEW_TEXT
        self.position = self._position

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self._position = max(0, min(value, self.token_count))

    @property
    def token_count(self) -> int:
        return count_tokens(self._text)

    def set_source(
        self, source: ReadingStateSource, source_description: Optional[str] = None
    ) -> None:
        """Replaces the provenance tag and its description together."""
        self.source = source
        self.source_description = source_description

    def copy(self) -> "ReadingState":
        """Returns an independent snapshot, position included."""
        clone = ReadingState(
            self.title,
            self._text,
            self.source,
            self.source_description,
            self.last_read,
        )
        clone.position = self._position
        return clone

    def __repr__(self) -> str:
        return (
            f"ReadingState(title={self.title!r}, source={self.source.name}, "
            f"position={self._position}/{self.token_count})"
        )

    # Factories

    @classmethod
    def create(
        cls,
        title: str,
        text: str,
        source: ReadingStateSource,
        source_description: Optional[str] = None,
        last_read: Optional[datetime] = None,
    ) -> "ReadingState":
        return cls(title, text, source, source_description, last_read)

    @classmethod
    def get_demo(
        cls,
        source: ReadingStateSource = ReadingStateSource.DEMO,
        source_description: Optional[str] = None,
    ) -> "ReadingState":
        return cls(
            constants.DEMO_TITLE, constants.DEMO_TEXT, source, source_description
        )

    @classmethod
    def get_blank(
        cls,
        source: ReadingStateSource = ReadingStateSource.NEW_BLANK,
        source_description: Optional[str] = None,
    ) -> "ReadingState":
        return cls(
            constants.DEFAULT_NEW_TITLE,
            constants.DEFAULT_NEW_TEXT,
            source,
            source_description,
        )

    def is_demo(self) -> bool:
        return self.title == constants.DEMO_TITLE

    # Serialized codec

    @classmethod
    def import_from_serialized(
        cls,
        payload: str,
        fallback_source: ReadingStateSource,
        fallback_source_description: Optional[str] = None,
        version: Optional[str] = None,
    ) -> "ReadingState":
        """
        Builds a state from a saved JSON object.

        Only ``Text`` is required. Every other field falls back to a default:
        ``LastRead`` to now, ``Source``/``SourceDescription`` to the given
        fallbacks and ``Title`` to the blank state's title.
        """
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            raise MalformedInputError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedInputError("Expected a JSON object")

        text = data.get("Text")
        if not isinstance(text, str):
            raise MissingFieldError("Text")

        last_read = _parse_last_read(data.get("LastRead"))
        source = _parse_source(data.get("Source"), fallback_source)

        source_description = data.get("SourceDescription")
        if not isinstance(source_description, str):
            source_description = fallback_source_description

        title = data.get("Title")
        if not isinstance(title, str):
            title = cls.get_blank(source, source_description).title

        state = cls(title, text, source, source_description, last_read)

        logger.info(
            "Imported reading state from JSON (source=%s, description=%s, version=%s)",
            source.name,
            source_description,
            version,
        )
        return state

    def to_serialized(self) -> SerializedReadingState:
        return {
            "Title": self.title,
            "Text": self._text,
            "LastRead": self.last_read.isoformat(),
            "Source": int(self.source),
            "SourceDescription": self.source_description,
        }

    def export_to_serialized(self) -> str:
        return json.dumps(self.to_serialized())

    @classmethod
    async def scrape_from_web(
        cls,
        request: "ExtractionRequest",
        extractor: Optional["ContentExtractor"] = None,
    ) -> "ReadingState":
        """Extracts a page into a new state tagged as a website extract."""
        if extractor is None:
            # pylint: disable=import-outside-toplevel
            from leto.services import web

            extractor = web.ContentExtractor()

        title, text = await extractor.extract(request)

        state = cls.get_blank(
            ReadingStateSource.WEBSITE_EXTRACT, f"Extracted from {request.url}"
        )
        if title:
            state.title = title
        state.text = text
        return state


def _parse_last_read(value: Any) -> datetime:
    if value is None:
        return datetime.now()
    if isinstance(value, str):
        cleaned = re.sub(r"[Zz]$", "+00:00", value.strip())
        # Older fromisoformat only takes 3 or 6 fractional digits; saves may carry 7
        cleaned = re.sub(
            r"\.(\d+)", lambda m: "." + m.group(1)[:6].ljust(6, "0"), cleaned, count=1
        )
        try:
            return datetime.fromisoformat(cleaned)
        except ValueError:
            pass
    logger.warning("Unreadable LastRead %r, using current time.", value)
    return datetime.now()


def _parse_source(value: Any, fallback: ReadingStateSource) -> ReadingStateSource:
    if value is None:
        return fallback
    try:
        return ReadingStateSource.parse(value)
    except ValueError:
        logger.warning("Unknown Source %r, using %s.", value, fallback.name)
        return fallback


class ExtractionMethod(str, Enum):
    """How the body text is picked out of a web page."""

    LARGEST_ARTICLE_SUBSECTION = "largest-article"
    PATH_SELECT = "path-select"


@dataclass
class PathSelectOptions:
    path: str = ""
    select_all: bool = False


@dataclass
class ExtractionRequest:
    """A website extraction request."""

    url: str
    method: ExtractionMethod = ExtractionMethod.LARGEST_ARTICLE_SUBSECTION
    path_select_options: PathSelectOptions = field(default_factory=PathSelectOptions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionRequest":
        """Parses ``{url, method, path?, selectAll?}``."""
        if not data.get("url"):
            raise ScrapingError("A url is required")

        raw_method = data.get("method", ExtractionMethod.LARGEST_ARTICLE_SUBSECTION)
        try:
            method = ExtractionMethod(raw_method)
        except ValueError as e:
            raise ScrapingError(f"Invalid extraction method: {raw_method!r}") from e

        return cls(
            url=data["url"],
            method=method,
            path_select_options=PathSelectOptions(
                path=data.get("path") or "",
                select_all=bool(data.get("selectAll", False)),
            ),
        )
