# controllers/author.py
import asyncio

from loguru import logger

from crud import Store
from errors import NotFoundError
from presenters import AUTHORS_URL, author_url
from schemas import AuthorCreate
from validation import ISODate, Escape, FieldRules, Length, OptionalIfEmpty, Required, Trim, validate

from .results import Page, Redirect

AUTHOR_RULES = (
    FieldRules("first_name", (
        Trim(),
        Required("First name must be specified."),
        Length(max=100, message="First name must not exceed 100 characters."),
        Escape(),
    )),
    FieldRules("family_name", (
        Trim(),
        Required("Family name must be specified."),
        Length(max=100, message="Family name must not exceed 100 characters."),
        Escape(),
    )),
    FieldRules("date_of_birth", (Trim(), OptionalIfEmpty(), ISODate("Invalid date of birth"))),
    FieldRules("date_of_death", (Trim(), OptionalIfEmpty(), ISODate("Invalid date of death"))),
)


def _form(title, author=None, errors=()):
    return Page("author_form.html", {"title": title, "author": author, "errors": list(errors)})


async def _author_and_books(store: Store, id: str):
    return await asyncio.gather(
        store.authors.find_by_id(id),
        store.books.find_all({"author": id}, fields=("title", "summary")),
    )


async def author_list(store: Store) -> Page:
    authors = await store.authors.find_all()
    return Page("author_list.html", {"title": "Author List", "author_list": authors})


async def author_detail(store: Store, id: str) -> Page:
    author, books = await _author_and_books(store, id)
    if author is None:
        raise NotFoundError("Author not found")
    return Page("author_detail.html", {"title": "Author Detail", "author": author, "author_books": books})


def author_create_get() -> Page:
    return _form("Create Author")


async def author_create_post(store: Store, form) -> Page | Redirect:
    result = validate(form, AUTHOR_RULES)
    if not result.ok:
        return _form("Create Author", result.values, result.errors)

    # authors may legitimately share a name, so no duplicate check here
    author = await store.authors.create(AuthorCreate(**result.values))
    return Redirect(author_url(author))


async def author_delete_get(store: Store, id: str) -> Page | Redirect:
    author, books = await _author_and_books(store, id)
    if author is None:
        return Redirect(AUTHORS_URL)
    return Page("author_delete.html", {"title": "Delete Author", "author": author, "author_books": books})


async def author_delete_post(store: Store, id: str) -> Page | Redirect:
    author, books = await _author_and_books(store, id)
    if author is None:
        return Redirect(AUTHORS_URL)
    if books:
        logger.warning("Refusing to delete author {}: {} book(s) still reference it", id, len(books))
        return Page("author_delete.html", {"title": "Delete Author", "author": author, "author_books": books})

    await store.authors.delete_by_id(id)
    return Redirect(AUTHORS_URL)


async def author_update_get(store: Store, id: str) -> Page:
    author = await store.authors.find_by_id(id)
    if author is None:
        raise NotFoundError("Author not found")
    return _form("Update Author", author)


async def author_update_post(store: Store, id: str, form) -> Page | Redirect:
    result = validate(form, AUTHOR_RULES)
    if not result.ok:
        return _form("Update Author", {**result.values, "id": id}, result.errors)

    author = await store.authors.update_by_id(id, AuthorCreate(**result.values))
    if author is None:
        raise NotFoundError("Author not found")
    return Redirect(author_url(author))
