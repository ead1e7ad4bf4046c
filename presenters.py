"""
Derived display values.

Every value here is computed from a stored record on demand and never
persisted. The functions are also registered as template globals.
"""
from datetime import date
from typing import Any, Optional

CATALOG = "/catalog"

AUTHORS_URL = f"{CATALOG}/authors"
GENRES_URL = f"{CATALOG}/genres"
BOOKS_URL = f"{CATALOG}/books"
BOOK_INSTANCES_URL = f"{CATALOG}/bookinstances"


def _get(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def author_name(author: Any) -> str:
    """'family, first', or '' unless both names are present."""
    first_name = _get(author, "first_name")
    family_name = _get(author, "family_name")
    if not first_name or not family_name:
        return ""
    return f"{family_name}, {first_name}"


def author_url(author: Any) -> str:
    return f"{CATALOG}/author/{_get(author, 'id')}"


def genre_url(genre: Any) -> str:
    return f"{CATALOG}/genre/{_get(genre, 'id')}"


def book_url(book: Any) -> str:
    return f"{CATALOG}/book/{_get(book, 'id')}"


def book_instance_url(book_instance: Any) -> str:
    return f"{CATALOG}/bookinstance/{_get(book_instance, 'id')}"


def iso_date(value: Optional[date]) -> str:
    return value.isoformat() if isinstance(value, date) else ""


def formatted_date(value: Optional[date]) -> str:
    # e.g. "Oct 6, 2023"
    if not isinstance(value, date):
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def author_lifespan(author: Any) -> str:
    return f"{formatted_date(_get(author, 'date_of_birth'))} - {formatted_date(_get(author, 'date_of_death'))}"


TEMPLATE_GLOBALS = {
    "author_name": author_name,
    "author_url": author_url,
    "author_lifespan": author_lifespan,
    "genre_url": genre_url,
    "book_url": book_url,
    "book_instance_url": book_instance_url,
    "iso_date": iso_date,
    "formatted_date": formatted_date,
}
