# errors.py
class CatalogError(Exception):
    """Base for errors that end a request with an error page."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(CatalogError):
    status_code = 404
