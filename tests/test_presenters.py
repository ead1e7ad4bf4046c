from datetime import date

from presenters import (
    author_lifespan,
    author_name,
    author_url,
    book_instance_url,
    book_url,
    formatted_date,
    genre_url,
    iso_date,
)
from schemas import Author


def make_author(**kwargs):
    data = {"id": "a1", "first_name": "Jane", "family_name": "Austen"}
    data.update(kwargs)
    return Author(**data)


def test_full_name_is_family_then_first():
    assert author_name(make_author()) == "Austen, Jane"


def test_full_name_is_empty_when_a_name_is_missing():
    assert author_name(make_author(first_name="")) == ""
    assert author_name(make_author(family_name="")) == ""
    assert author_name({"first_name": "Jane"}) == ""


def test_canonical_paths():
    assert author_url(make_author()) == "/catalog/author/a1"
    assert genre_url({"id": "g1"}) == "/catalog/genre/g1"
    assert book_url({"id": "b1"}) == "/catalog/book/b1"
    assert book_instance_url({"id": "i1"}) == "/catalog/bookinstance/i1"


def test_dates():
    assert iso_date(date(1775, 12, 16)) == "1775-12-16"
    assert iso_date(None) == ""
    assert formatted_date(date(1775, 12, 16)) == "Dec 16, 1775"
    assert formatted_date(None) == ""


def test_lifespan():
    author = make_author(date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18))
    assert author_lifespan(author) == "Dec 16, 1775 - Jul 18, 1817"
    assert author_lifespan(make_author()) == " - "
