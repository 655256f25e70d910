"""
Store-level exceptions for consistent error handling across the toolkit.

Single-record reads never raise a not-found error; they return ``None``.
Zero-match updates and deletes are reported through their counts.
"""


class StoreUnavailable(Exception):
    """Raised when the document store cannot be reached or refuses the credentials."""

    def __init__(self, e=None, message=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__("Store unavailable")
        self.error = e
        self.message = message


class ValidationError(Exception):
    """Raised for malformed records or query arguments. The store is not called."""

    def __init__(self, e=None, message=None, field=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__("Validation error")
        self.error = e
        self.message = message
        self.field = field


class IndexConflict(Exception):
    """Raised when an index name is already taken by a different specification."""

    def __init__(self, name: str, e=None, message=None):
        self.name = name
        self.error = e
        self.message = message or f"Index '{name}' already exists with a different specification"
        super().__init__(self.message)


class DatabaseError(Exception):
    """Raised for any other driver failure (operation failures, write errors, etc.)."""

    def __init__(self, e=None, message=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__("Database error")
        self.error = e
        self.message = message
