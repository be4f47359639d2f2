"""
View Models for client responses
Strict mapping layer that converts OpenLibrary payloads into the shapes
downstream book-management clients consume.
"""
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from catalog_proxy.utils.helpers import strip_prefix

DEFAULT_COVERS_BASE_URL = "https://covers.openlibrary.org"

_SERIES_PATTERN = re.compile("series", re.IGNORECASE)


# =============================================================================
# PAYLOAD CONTRACTS
# =============================================================================
# Clients only ever see these shapes, never raw upstream JSON. Missing
# upstream values become None, lists default to [].


def series_from_subjects(subjects: Optional[Iterable[str]]) -> Optional[str]:
    """First subject mentioning a series, e.g. "Discworld (Imaginary place) series"."""
    for subject in subjects or []:
        if isinstance(subject, str) and _SERIES_PATTERN.search(subject):
            return subject
    return None


def cover_url(cover_id: Any, covers_base_url: str = DEFAULT_COVERS_BASE_URL) -> Optional[str]:
    """Large cover image URL for an OpenLibrary cover id."""
    if not cover_id:
        return None
    return f"{covers_base_url}/b/id/{cover_id}-L.jpg"


def _first_cover(raw: Dict[str, Any]) -> Any:
    covers = raw.get("covers") or []
    return covers[0] if covers else None


def _author_ids(raw: Dict[str, Any]) -> List[Optional[str]]:
    ids = []
    for role in raw.get("authors") or []:
        author = (role or {}).get("author") or {}
        ids.append(strip_prefix(author.get("key"), "/authors/"))
    return ids


def _description(raw: Dict[str, Any]) -> Optional[str]:
    # Either a plain string or {"type": "/type/text", "value": "..."}
    description = raw.get("description")
    if isinstance(description, str):
        return description
    if isinstance(description, dict):
        return description.get("value") or None
    return None


@dataclass
class AuthorPayload:
    """One author search hit."""
    id: Optional[str]
    name: Optional[str]
    birth_date: Optional[str]
    top_work: Optional[str]
    work_count: int = 0

    @classmethod
    def from_raw(cls, doc: Dict[str, Any]) -> "AuthorPayload":
        """Map a /search/authors.json doc."""
        doc = doc or {}
        return cls(
            id=strip_prefix(doc.get("key"), "/authors/"),
            name=doc.get("name") or None,
            birth_date=doc.get("birth_date") or None,
            top_work=doc.get("top_work") or None,
            work_count=doc.get("work_count") or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return asdict(self)


@dataclass
class WorkSummaryPayload:
    """One entry of an author's works list."""
    id: Optional[str]
    title: Optional[str]
    authors: List[Optional[str]] = field(default_factory=list)
    first_publish_date: Any = None  # date string, or a bare year
    subjects: List[str] = field(default_factory=list)
    series: Optional[str] = None
    cover_url: Optional[str] = None

    @classmethod
    def from_raw(
        cls,
        entry: Dict[str, Any],
        covers_base_url: str = DEFAULT_COVERS_BASE_URL,
    ) -> "WorkSummaryPayload":
        """Map an /authors/{key}/works.json entry."""
        entry = entry or {}
        subjects = entry.get("subjects") or []
        return cls(
            id=strip_prefix(entry.get("key"), "/works/"),
            title=entry.get("title") or None,
            authors=_author_ids(entry),
            first_publish_date=(
                entry.get("first_publish_date") or entry.get("first_publish_year") or None
            ),
            subjects=subjects,
            series=series_from_subjects(subjects),
            cover_url=cover_url(_first_cover(entry), covers_base_url),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return asdict(self)


@dataclass
class WorkDetailPayload:
    """
    Full work record with ISBNs collected from its editions.
    UI relies on these exact field names.
    """
    id: Optional[str]
    title: Optional[str]
    description: Optional[str]
    subjects: List[str]
    series: Optional[str]
    authors: List[Optional[str]]
    isbns: List[str]
    cover_url: Optional[str]

    @classmethod
    def from_raw(
        cls,
        work: Dict[str, Any],
        editions: Optional[Iterable[Dict[str, Any]]],
        covers_base_url: str = DEFAULT_COVERS_BASE_URL,
    ) -> "WorkDetailPayload":
        """Map /works/{key}.json plus its /editions.json entries."""
        work = work or {}
        subjects = work.get("subjects") or []

        # ISBN-10s then ISBN-13s per edition, first occurrence wins
        isbns: Dict[str, None] = {}
        for edition in editions or []:
            edition = edition or {}
            for isbn in (edition.get("isbn_10") or []) + (edition.get("isbn_13") or []):
                isbns.setdefault(isbn, None)

        return cls(
            id=strip_prefix(work.get("key"), "/works/"),
            title=work.get("title") or None,
            description=_description(work),
            subjects=subjects,
            series=series_from_subjects(subjects),
            authors=_author_ids(work),
            isbns=list(isbns),
            cover_url=cover_url(_first_cover(work), covers_base_url),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "subjects": self.subjects,
            "series": self.series,
            "authors": self.authors,
            "identifiers": {
                "isbn": self.isbns,
                "openlibrary": self.id,
            },
            "cover_url": self.cover_url,
        }


# =============================================================================
# CONVERSION FUNCTIONS
# =============================================================================

def authors_to_view_models(docs: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Map author search docs to client payloads."""
    return [AuthorPayload.from_raw(doc).to_dict() for doc in docs or []]


def works_to_view_models(
    entries: Optional[List[Dict[str, Any]]],
    covers_base_url: str = DEFAULT_COVERS_BASE_URL,
) -> List[Dict[str, Any]]:
    """Map author works entries to client payloads."""
    return [
        WorkSummaryPayload.from_raw(entry, covers_base_url).to_dict()
        for entry in entries or []
    ]


def work_detail_to_view_model(
    work: Dict[str, Any],
    editions: Optional[List[Dict[str, Any]]],
    covers_base_url: str = DEFAULT_COVERS_BASE_URL,
) -> Dict[str, Any]:
    """Map a work and its editions to the client detail payload."""
    return WorkDetailPayload.from_raw(work, editions, covers_base_url).to_dict()
