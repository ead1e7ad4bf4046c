# controllers/book_instance.py
import asyncio

from loguru import logger

from crud import Store
from errors import NotFoundError
from presenters import BOOK_INSTANCES_URL, book_instance_url
from schemas import BookInstanceCreate, BookStatus
from validation import Escape, FieldError, FieldRules, ISODate, OneOf, OptionalIfEmpty, Required, Trim, validate

from .results import Page, Redirect

STATUSES = tuple(s.value for s in BookStatus)

BOOK_INSTANCE_RULES = (
    FieldRules("book", (Trim(), Required("Book must be specified"), Escape())),
    FieldRules("imprint", (Trim(), Required("Imprint must be specified"), Escape())),
    FieldRules(
        "status",
        (Trim(), OneOf(choices=STATUSES, message=f"Status must be one of {', '.join(STATUSES)}"), Escape()),
        default=BookStatus.MAINTENANCE.value,
    ),
    FieldRules("due_back", (Trim(), OptionalIfEmpty(), ISODate("Invalid date"))),
)


def _book_choices(store: Store):
    return store.books.find_all(fields=("title",))


def _form(title: str, books, book_instance=None, errors=()) -> Page:
    selected_book = None
    if book_instance is not None:
        book = book_instance["book"] if isinstance(book_instance, dict) else book_instance.book
        selected_book = getattr(book, "id", book)
    return Page("bookinstance_form.html", {
        "title": title,
        "bookinstance": book_instance,
        "book_list": books,
        "selected_book": selected_book,
        "statuses": STATUSES,
        "errors": list(errors),
    })


async def book_instance_list(store: Store) -> Page:
    instances = await store.book_instances.find_all(populate=True)
    return Page("bookinstance_list.html", {"title": "Book Instance List", "bookinstance_list": instances})


async def book_instance_detail(store: Store, id: str) -> Page:
    instance = await store.book_instances.find_by_id(id, populate=True)
    if instance is None:
        raise NotFoundError("Book copy not found")
    return Page("bookinstance_detail.html", {
        "title": f"Copy: {instance.book.title}",
        "bookinstance": instance,
    })


async def book_instance_create_get(store: Store) -> Page:
    return _form("Create Book Instance", await _book_choices(store))


async def book_instance_create_post(store: Store, form) -> Page | Redirect:
    result = validate(form, BOOK_INSTANCE_RULES)
    if result.ok and await store.books.find_by_id(result.values["book"]) is None:
        result.errors.append(FieldError("book", "Book must be an existing book"))
    if not result.ok:
        return _form("Create Book Instance", await _book_choices(store), result.values, result.errors)

    instance = await store.book_instances.create(BookInstanceCreate(**result.values))
    return Redirect(book_instance_url(instance))


async def book_instance_delete_get(store: Store, id: str) -> Page | Redirect:
    instance = await store.book_instances.find_by_id(id, populate=True)
    if instance is None:
        return Redirect(BOOK_INSTANCES_URL)
    return Page("bookinstance_delete.html", {"title": "Delete Book Instance", "bookinstance": instance})


async def book_instance_delete_post(store: Store, id: str) -> Page | Redirect:
    instance = await store.book_instances.find_by_id(id, populate=True)
    if instance is None:
        return Redirect(BOOK_INSTANCES_URL)
    if instance.status != BookStatus.AVAILABLE:
        logger.warning("Refusing to delete book copy {}: status is {}", id, instance.status.value)
        return Page("bookinstance_delete.html", {"title": "Delete Book Instance", "bookinstance": instance})

    await store.book_instances.delete_by_id(id)
    return Redirect(BOOK_INSTANCES_URL)


async def book_instance_update_get(store: Store, id: str) -> Page:
    instance, books = await asyncio.gather(
        store.book_instances.find_by_id(id),
        _book_choices(store),
    )
    if instance is None:
        raise NotFoundError("Book copy not found")
    return _form("Update Book Instance", books, instance)


async def book_instance_update_post(store: Store, id: str, form) -> Page | Redirect:
    result = validate(form, BOOK_INSTANCE_RULES)
    if result.ok and await store.books.find_by_id(result.values["book"]) is None:
        result.errors.append(FieldError("book", "Book must be an existing book"))
    if not result.ok:
        books = await _book_choices(store)
        return _form("Update Book Instance", books, {**result.values, "id": id}, result.errors)

    instance = await store.book_instances.update_by_id(id, BookInstanceCreate(**result.values))
    if instance is None:
        raise NotFoundError("Book copy not found")
    return Redirect(book_instance_url(instance))
