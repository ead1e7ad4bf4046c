# controllers/genre.py
import asyncio

from loguru import logger

from crud import Store
from errors import NotFoundError
from presenters import GENRES_URL, genre_url
from schemas import GenreCreate
from validation import Escape, FieldRules, Length, Trim, validate

from .results import Page, Redirect

# create asks for 3 characters, update for 1; the two forms have always differed
GENRE_CREATE_RULES = (
    FieldRules("name", (
        Trim(),
        Length(min=3, max=100, message="Genre must be at least 3 characters"),
        Escape(),
    )),
)

GENRE_UPDATE_RULES = (
    FieldRules("name", (
        Trim(),
        Length(min=1, max=100, message="An updated genre name must be provided"),
        Escape(),
    )),
)


def _form(title, genre=None, errors=()):
    return Page("genre_form.html", {"title": title, "genre": genre, "errors": list(errors)})


async def _genre_and_books(store: Store, id: str):
    return await asyncio.gather(
        store.genres.find_by_id(id),
        store.books.find_all({"genre": id}, fields=("title", "summary")),
    )


async def genre_list(store: Store) -> Page:
    genres = await store.genres.find_all()
    return Page("genre_list.html", {"title": "Genre List", "genre_list": genres})


async def genre_detail(store: Store, id: str) -> Page:
    genre, books = await _genre_and_books(store, id)
    if genre is None:
        raise NotFoundError("Genre not found")
    return Page("genre_detail.html", {"title": "Genre Detail", "genre": genre, "genre_books": books})


def genre_create_get() -> Page:
    return _form("Create Genre")


async def genre_create_post(store: Store, form) -> Page | Redirect:
    result = validate(form, GENRE_CREATE_RULES)
    if not result.ok:
        return _form("Create Genre", result.values, result.errors)

    existing = await store.genres.find_one({"name": result.values["name"]})
    if existing is not None:
        logger.info("Genre {!r} already exists as {}", existing.name, existing.id)
        return Redirect(genre_url(existing))

    genre = await store.genres.create(GenreCreate(**result.values))
    return Redirect(genre_url(genre))


async def genre_delete_get(store: Store, id: str) -> Page | Redirect:
    genre, books = await _genre_and_books(store, id)
    if genre is None:
        return Redirect(GENRES_URL)
    return Page("genre_delete.html", {"title": "Delete Genre", "genre": genre, "genre_books": books})


async def genre_delete_post(store: Store, id: str) -> Page | Redirect:
    genre, books = await _genre_and_books(store, id)
    if genre is None:
        return Redirect(GENRES_URL)
    if books:
        logger.warning("Refusing to delete genre {}: {} book(s) still reference it", id, len(books))
        return Page("genre_delete.html", {"title": "Delete Genre", "genre": genre, "genre_books": books})

    await store.genres.delete_by_id(id)
    return Redirect(GENRES_URL)


async def genre_update_get(store: Store, id: str) -> Page:
    genre = await store.genres.find_by_id(id)
    if genre is None:
        raise NotFoundError("Genre not found")
    return _form("Update Genre", genre)


async def genre_update_post(store: Store, id: str, form) -> Page | Redirect:
    result = validate(form, GENRE_UPDATE_RULES)
    if not result.ok:
        return _form("Update Genre", {**result.values, "id": id}, result.errors)

    genre = await store.genres.update_by_id(id, GenreCreate(**result.values))
    if genre is None:
        raise NotFoundError("Genre not found")
    return Redirect(genre_url(genre))
