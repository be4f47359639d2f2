"""
Tests for the OpenLibrary -> client payload mapping layer.
"""
from catalog_proxy.view_models import (
    AuthorPayload,
    WorkDetailPayload,
    WorkSummaryPayload,
    authors_to_view_models,
    series_from_subjects,
    work_detail_to_view_model,
    works_to_view_models,
)


# =============================================================================
# Test Fixtures (Mock Data)
# =============================================================================

AUTHOR_DOC = {
    "key": "OL25712A",
    "name": "Terry Pratchett",
    "birth_date": "28 April 1948",
    "top_work": "Good Omens",
    "work_count": 612,
}

WORK_ENTRY = {
    "key": "/works/OL453936W",
    "title": "Guards! Guards!",
    "authors": [{"author": {"key": "/authors/OL25712A"}, "type": {"key": "/type/author_role"}}],
    "first_publish_date": "1989",
    "subjects": ["Fantasy", "Discworld (Imaginary place) series", "Wizards"],
    "covers": [8231856, 1234],
}

WORK = {
    "key": "/works/OL453936W",
    "title": "Guards! Guards!",
    "description": {"type": "/type/text", "value": "The eighth Discworld novel."},
    "subjects": ["Fantasy"],
    "authors": [{"author": {"key": "/authors/OL25712A"}}],
    "covers": [8231856],
}

EDITIONS = [
    {"isbn_10": ["0575043067"], "isbn_13": ["9780575043060"]},
    {"isbn_13": ["9780575043060", "9780552134637"]},
    {},
]


def test_series_from_subjects_is_case_insensitive():
    assert series_from_subjects(["Fiction", "Rincewind SERIES"]) == "Rincewind SERIES"
    assert series_from_subjects(["Fiction"]) is None
    assert series_from_subjects(None) is None


def test_author_payload():
    assert AuthorPayload.from_raw(AUTHOR_DOC).to_dict() == {
        "id": "OL25712A",
        "name": "Terry Pratchett",
        "birth_date": "28 April 1948",
        "top_work": "Good Omens",
        "work_count": 612,
    }


def test_author_payload_strips_key_prefix():
    assert AuthorPayload.from_raw({"key": "/authors/OL1A"}).id == "OL1A"


def test_author_payload_missing_fields():
    assert AuthorPayload.from_raw({}).to_dict() == {
        "id": None,
        "name": None,
        "birth_date": None,
        "top_work": None,
        "work_count": 0,
    }


def test_work_summary_payload():
    payload = WorkSummaryPayload.from_raw(WORK_ENTRY).to_dict()

    assert payload == {
        "id": "OL453936W",
        "title": "Guards! Guards!",
        "authors": ["OL25712A"],
        "first_publish_date": "1989",
        "subjects": WORK_ENTRY["subjects"],
        "series": "Discworld (Imaginary place) series",
        "cover_url": "https://covers.openlibrary.org/b/id/8231856-L.jpg",
    }


def test_work_summary_falls_back_to_publish_year():
    payload = WorkSummaryPayload.from_raw({"key": "/works/OL1W", "first_publish_year": 1983})
    assert payload.first_publish_date == 1983
    assert payload.cover_url is None
    assert payload.subjects == []
    assert payload.series is None


def test_work_summary_author_without_key_maps_to_none():
    payload = WorkSummaryPayload.from_raw({"authors": [{"type": {}}, {"author": {"key": "/authors/OL2A"}}]})
    assert payload.authors == [None, "OL2A"]


def test_work_summary_uses_configured_cover_host():
    payload = WorkSummaryPayload.from_raw(WORK_ENTRY, covers_base_url="http://covers.local")
    assert payload.cover_url == "http://covers.local/b/id/8231856-L.jpg"


def test_work_detail_payload():
    payload = work_detail_to_view_model(WORK, EDITIONS)

    assert payload == {
        "id": "OL453936W",
        "title": "Guards! Guards!",
        "description": "The eighth Discworld novel.",
        "subjects": ["Fantasy"],
        "series": None,
        "authors": ["OL25712A"],
        "identifiers": {
            "isbn": ["0575043067", "9780575043060", "9780552134637"],
            "openlibrary": "OL453936W",
        },
        "cover_url": "https://covers.openlibrary.org/b/id/8231856-L.jpg",
    }


def test_work_detail_plain_string_description():
    payload = WorkDetailPayload.from_raw({"description": "Plain text"}, [])
    assert payload.description == "Plain text"


def test_work_detail_without_editions():
    payload = WorkDetailPayload.from_raw({"key": "/works/OL9W"}, None).to_dict()
    assert payload["identifiers"] == {"isbn": [], "openlibrary": "OL9W"}
    assert payload["description"] is None


def test_list_conversions_handle_missing_lists():
    assert authors_to_view_models(None) == []
    assert works_to_view_models(None) == []
    assert len(works_to_view_models([WORK_ENTRY, WORK_ENTRY])) == 2
