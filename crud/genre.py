# crud/genre.py
from models import Genre
from schemas import Genre as GenreRecord

from .base import Repository


class GenreRepository(Repository):
    name = "genre"
    model = Genre
    record = GenreRecord
    columns = {"name": Genre.name}
    default_sort = ("name",)
