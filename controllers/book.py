# controllers/book.py — books, plus the catalog home page
import asyncio
from typing import Any, Dict, Mapping

from loguru import logger

from crud import Store
from errors import NotFoundError
from presenters import BOOKS_URL, book_url
from schemas import BookCreate, BookStatus
from validation import Escape, FieldError, FieldRules, Required, Trim, as_list, validate

from .results import Page, Redirect

BOOK_RULES = (
    FieldRules("title", (Trim(), Required("Title must not be empty"), Escape())),
    FieldRules("author", (Trim(), Required("Author must not be empty"), Escape())),
    FieldRules("summary", (Trim(), Required("Summary must not be empty"), Escape())),
    FieldRules("isbn", (Trim(), Required("ISBN must not be empty"), Escape())),
    FieldRules("genre", (Escape(),), many=True),
)


def normalize_book_form(form: Mapping[str, Any]) -> Dict[str, Any]:
    """A lone checked genre arrives as a scalar; the rules expect a list."""
    data = dict(form)
    data["genre"] = as_list(form.get("genre"))
    return data


def _choices(store: Store):
    return asyncio.gather(store.authors.find_all(), store.genres.find_all())


async def _reference_errors(store: Store, values) -> list:
    """Checks that the author and every genre named by a valid form exist."""
    genre_ids = list(dict.fromkeys(values["genre"]))
    author, genres = await asyncio.gather(
        store.authors.find_by_id(values["author"]),
        store.genres.find_all({"id": genre_ids}),
    )
    errors = []
    if author is None:
        errors.append(FieldError("author", "Author must be an existing author"))
    if len(genres) != len(genre_ids):
        errors.append(FieldError("genre", "Genre must be an existing genre"))
    return errors


def _form(title: str, authors, genres, book=None, errors=()) -> Page:
    selected_author = None
    selected_genres = set()
    if book is not None:
        author = book["author"] if isinstance(book, dict) else book.author
        selected_author = getattr(author, "id", author)
        picked = book["genre"] if isinstance(book, dict) else book.genre
        selected_genres = {getattr(g, "id", g) for g in picked}
    return Page("book_form.html", {
        "title": title,
        "book": book,
        "authors": authors,
        "genres": genres,
        "selected_author": selected_author,
        "selected_genres": selected_genres,
        "errors": list(errors),
    })


async def index(store: Store) -> Page:
    books, copies, available, authors, genres = await asyncio.gather(
        store.books.count_all(),
        store.book_instances.count_all(),
        store.book_instances.count_all({"status": BookStatus.AVAILABLE}),
        store.authors.count_all(),
        store.genres.count_all(),
    )
    return Page("index.html", {
        "title": "Local Library Home",
        "book_count": books,
        "book_instance_count": copies,
        "book_instance_available_count": available,
        "author_count": authors,
        "genre_count": genres,
    })


async def book_list(store: Store) -> Page:
    books = await store.books.find_all(fields=("title", "author"), populate=True)
    return Page("book_list.html", {"title": "Book List", "book_list": books})


async def book_detail(store: Store, id: str) -> Page:
    book, instances = await asyncio.gather(
        store.books.find_by_id(id, populate=True),
        store.book_instances.find_all({"book": id}),
    )
    if book is None:
        raise NotFoundError("Book not found")
    return Page("book_detail.html", {"title": book.title, "book": book, "book_instances": instances})


async def book_create_get(store: Store) -> Page:
    authors, genres = await _choices(store)
    return _form("Create Book", authors, genres)


async def book_create_post(store: Store, form) -> Page | Redirect:
    result = validate(normalize_book_form(form), BOOK_RULES)
    if result.ok:
        result.errors.extend(await _reference_errors(store, result.values))
    if not result.ok:
        authors, genres = await _choices(store)
        return _form("Create Book", authors, genres, result.values, result.errors)

    book = await store.books.create(BookCreate(**result.values))
    return Redirect(book_url(book))


async def _book_and_copies(store: Store, id: str):
    return await asyncio.gather(
        store.books.find_by_id(id),
        store.book_instances.find_all({"book": id}),
    )


async def book_delete_get(store: Store, id: str) -> Page | Redirect:
    book, instances = await _book_and_copies(store, id)
    if book is None:
        return Redirect(BOOKS_URL)
    return Page("book_delete.html", {"title": "Delete Book", "book": book, "book_instances": instances})


async def book_delete_post(store: Store, id: str) -> Page | Redirect:
    book, instances = await _book_and_copies(store, id)
    if book is None:
        return Redirect(BOOKS_URL)
    if instances:
        logger.warning("Refusing to delete book {}: {} copies still exist", id, len(instances))
        return Page("book_delete.html", {"title": "Delete Book", "book": book, "book_instances": instances})

    await store.books.delete_by_id(id)
    return Redirect(BOOKS_URL)


async def book_update_get(store: Store, id: str) -> Page:
    book, authors, genres = await asyncio.gather(
        store.books.find_by_id(id, populate=True),
        store.authors.find_all(),
        store.genres.find_all(),
    )
    if book is None:
        raise NotFoundError("Book not found")
    return _form("Update Book", authors, genres, book)


async def book_update_post(store: Store, id: str, form) -> Page | Redirect:
    result = validate(normalize_book_form(form), BOOK_RULES)
    if result.ok:
        result.errors.extend(await _reference_errors(store, result.values))
    if not result.ok:
        authors, genres = await _choices(store)
        return _form("Update Book", authors, genres, {**result.values, "id": id}, result.errors)

    book = await store.books.update_by_id(id, BookCreate(**result.values))
    if book is None:
        raise NotFoundError("Book not found")
    return Redirect(book_url(book))
