# crud/author.py
from models import Author
from schemas import Author as AuthorRecord

from .base import Repository


class AuthorRepository(Repository):
    name = "author"
    model = Author
    record = AuthorRecord
    columns = {
        "first_name": Author.first_name,
        "family_name": Author.family_name,
        "date_of_birth": Author.date_of_birth,
        "date_of_death": Author.date_of_death,
    }
    default_sort = ("family_name",)
