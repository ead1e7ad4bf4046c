# crud/book_instance.py
from typing import Any

from sqlalchemy.orm import selectinload

from models import Book, BookInstance
from schemas import BookInstance as BookInstanceRecord
from schemas import BookStatus, PopulatedBookInstance

from .base import Repository


class BookInstanceRepository(Repository):
    name = "book instance"
    model = BookInstance
    record = BookInstanceRecord
    populated_record = PopulatedBookInstance
    columns = {
        "book": BookInstance.book_id,
        "imprint": BookInstance.imprint,
        "status": BookInstance.status,
        "due_back": BookInstance.due_back,
    }
    default_sort = ("status",)

    def __init__(self, db, books):
        super().__init__(db)
        self.books = books

    def _options(self, populate: bool) -> list:
        if populate:
            return [selectinload(BookInstance.book).selectinload(Book.genre_links)]
        return []

    def _clause(self, field: str, value: Any):
        if isinstance(value, BookStatus):
            value = value.value
        return super()._clause(field, value)

    def _value(self, row, field: str, populate: bool) -> Any:
        if field == "book" and populate:
            return self.books._to_record(row.book)
        if field == "status":
            return BookStatus(row.status)
        return super()._value(row, field, populate)
