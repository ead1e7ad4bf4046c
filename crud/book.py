# crud/book.py — books carry one author reference and an ordered list of genre references
from typing import Any

from sqlalchemy import delete, insert
from sqlalchemy.orm import selectinload

from models import Book, BookGenre
from schemas import Author as AuthorRecord
from schemas import Book as BookRecord
from schemas import Genre as GenreRecord
from schemas import PopulatedBook

from .base import Repository


class BookRepository(Repository):
    name = "book"
    model = Book
    record = BookRecord
    populated_record = PopulatedBook
    columns = {
        "title": Book.title,
        "author": Book.author_id,
        "summary": Book.summary,
        "isbn": Book.isbn,
    }
    default_sort = ("title",)

    def _options(self, populate: bool) -> list:
        if populate:
            return [
                selectinload(Book.genre_links).selectinload(BookGenre.genre),
                selectinload(Book.author),
            ]
        return [selectinload(Book.genre_links)]

    def _clause(self, field: str, value: Any):
        if field == "genre":
            return Book.genre_links.any(BookGenre.genre_id == value)
        return super()._clause(field, value)

    def _value(self, row, field: str, populate: bool) -> Any:
        if field == "author":
            return AuthorRecord.model_validate(row.author) if populate else row.author_id
        if field == "genre":
            if populate:
                return [GenreRecord.model_validate(link.genre) for link in row.genre_links]
            return [link.genre_id for link in row.genre_links]
        return super()._value(row, field, populate)

    async def _assign(self, session, row, record: BookRecord):
        row.title = record.title
        row.author_id = record.author
        row.summary = record.summary
        row.isbn = record.isbn
        # the book row must exist before its genre links can reference it
        session.add(row)
        await session.flush()

        await session.execute(delete(BookGenre).where(BookGenre.book_id == row.id))
        genre_ids = list(dict.fromkeys(record.genre))
        if genre_ids:
            await session.execute(
                insert(BookGenre),
                [{"book_id": row.id, "genre_id": gid, "position": i} for i, gid in enumerate(genre_ids)],
            )
