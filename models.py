# models.py
import uuid

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


def new_id() -> str:
    return uuid.uuid4().hex


class Author(Base):
    __tablename__ = "authors"
    id = Column(String(32), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)


class Genre(Base):
    __tablename__ = "genres"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, index=True)   # unique by convention only


class BookGenre(Base):
    """One entry of a book's genre list; `position` keeps the list order."""

    __tablename__ = "book_genre"
    book_id = Column(String(32), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    genre_id = Column(String(32), ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    genre = relationship(Genre, lazy="raise")


class Book(Base):
    __tablename__ = "books"
    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String, nullable=False, index=True)
    author_id = Column(String(32), ForeignKey("authors.id"), nullable=False, index=True)
    summary = Column(Text, nullable=False)
    isbn = Column(String, nullable=False)

    author = relationship(Author, lazy="raise")
    # written by BookRepository, never through the relationship
    genre_links = relationship(BookGenre, order_by=BookGenre.position, viewonly=True, lazy="raise")


class BookInstance(Base):
    __tablename__ = "book_instances"
    id = Column(String(32), primary_key=True, default=new_id)
    book_id = Column(String(32), ForeignKey("books.id"), nullable=False, index=True)
    imprint = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="Maintenance", index=True)
    due_back = Column(Date, nullable=True)

    book = relationship(Book, lazy="raise")
