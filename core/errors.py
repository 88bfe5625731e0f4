# core/errors.py
"""Errors raised by the loan ledger and the credential check.

Every error carries a machine-readable ``kind`` and a human-readable
``message``. The API layer decides which HTTP status each kind maps to.
"""


class LibraryError(Exception):
    """Base exception for library system errors."""
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LibraryError):
    """A referenced book, user or loan does not exist."""
    kind = "not_found"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found")


class Unavailable(LibraryError):
    """The book has no copies left to lend."""
    kind = "unavailable"

    def __init__(self, book_id):
        self.book_id = book_id
        super().__init__("Book not available")


class AlreadyReturned(LibraryError):
    """The loan has already been closed."""
    kind = "already_returned"

    def __init__(self, loan_id):
        self.loan_id = loan_id
        super().__init__("Loan already returned")


class InventoryConflict(LibraryError):
    """A copy count change would break 0 <= available <= total."""
    kind = "inventory_conflict"


class InvalidCredentials(LibraryError):
    kind = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid credentials")


class StoreFailure(LibraryError):
    """The underlying database operation failed."""
    kind = "store_failure"
