from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class BookStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class AuthorBase(BaseModel):
    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None


class AuthorCreate(AuthorBase):
    pass


class Author(AuthorBase):
    id: str

    model_config = ConfigDict(from_attributes=True)


class GenreBase(BaseModel):
    name: str


class GenreCreate(GenreBase):
    pass


class Genre(GenreBase):
    id: str

    model_config = ConfigDict(from_attributes=True)


class BookBase(BaseModel):
    title: str
    author: str
    summary: str
    isbn: str
    genre: List[str] = []


class BookCreate(BookBase):
    pass


class Book(BookBase):
    id: str


class PopulatedBook(Book):
    """A Book with its author and genre references resolved to full records."""

    author: Author
    genre: List[Genre] = []


class BookInstanceBase(BaseModel):
    book: str
    imprint: str
    status: BookStatus = BookStatus.MAINTENANCE
    due_back: Optional[date] = None


class BookInstanceCreate(BookInstanceBase):
    pass


class BookInstance(BookInstanceBase):
    id: str


class PopulatedBookInstance(BookInstance):
    book: Book
