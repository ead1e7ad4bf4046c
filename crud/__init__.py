from database import Database

from .author import AuthorRepository
from .book import BookRepository
from .book_instance import BookInstanceRepository
from .genre import GenreRepository


class Store:
    """The entity store handle: one repository per collection over a shared Database."""

    def __init__(self, db: Database):
        self.db = db
        self.authors = AuthorRepository(db)
        self.genres = GenreRepository(db)
        self.books = BookRepository(db)
        self.book_instances = BookInstanceRepository(db, self.books)


__all__ = [
    "Store",
    "AuthorRepository",
    "BookRepository",
    "BookInstanceRepository",
    "GenreRepository",
]
