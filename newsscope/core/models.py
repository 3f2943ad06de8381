from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

UNKNOWN = "Unknown"
NO_TITLE = "No title"


@dataclass(frozen=True)
class ArticleRecord:
    title: str
    link: str
    author: str = UNKNOWN
    publication_date: str = UNKNOWN
    source: str = UNKNOWN
    content: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the wire field names; optional fields only when set."""
        out: Dict[str, Any] = {
            "title": self.title,
            "link": self.link,
            "author": self.author,
            "publicationDate": self.publication_date,
            "source": self.source,
        }
        if self.content is not None:
            out["content"] = self.content
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class Extraction:
    """Outcome of extracting one article page.

    ``complete`` is False when the document was fetched but field extraction
    failed and the record was rebuilt from the fallback title plus body text.
    Both variants serialize to the same record shape.
    """

    record: ArticleRecord
    complete: bool = True


class Candidate(NamedTuple):
    url: str
    text: str
