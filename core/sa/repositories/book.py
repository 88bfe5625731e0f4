# core/sa/repositories/book.py
from typing import Optional, List, Any
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from ..models import Book

# Copy counts are owned by the loan ledger; the catalog only edits these
UPDATABLE_FIELDS = frozenset({
    'title', 'author', 'isbn', 'category', 'publish_year', 'description', 'cover_image'
})
REQUIRED_FIELDS = ('title', 'author', 'isbn')

class BookRepository:
    """Repository for managing Book entities (the catalog)."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID"""
        return self.session.get(Book, book_id)

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get a book by its ISBN"""
        return self.session.scalars(select(Book).where(Book.isbn == isbn)).first()

    def get_all(self) -> List[Book]:
        """Get every book in store order"""
        return list(self.session.scalars(select(Book).order_by(Book.id)))

    def count_books(self) -> int:
        return self.session.query(Book).count()

    def create_book(
        self,
        title: str,
        author: str,
        isbn: str,
        total_copies: int = 1,
        available_copies: Optional[int] = None,
        **details: Any
    ) -> Book:
        """Create a new book.

        Args:
            title: Book title
            author: Author name
            isbn: ISBN, unique across the catalog
            total_copies: Number of copies owned
            available_copies: Copies on the shelf; defaults to total_copies
            details: Optional descriptive fields (category, publish_year,
                     description, cover_image)

        Returns:
            The created Book object

        Raises:
            ValueError: If the ISBN is taken or the copy counts are inconsistent
        """
        if available_copies is None:
            available_copies = total_copies
        if total_copies < 0:
            raise ValueError("Total copies cannot be negative")
        if not 0 <= available_copies <= total_copies:
            raise ValueError("Available copies must be between 0 and total copies")

        unknown = set(details) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown book fields: {', '.join(sorted(unknown))}")

        if self.get_by_isbn(isbn):
            raise ValueError(f"Book with ISBN '{isbn}' already exists")

        book = Book(
            title=title,
            author=author,
            isbn=isbn,
            total_copies=total_copies,
            available_copies=available_copies,
            **details
        )
        self.session.add(book)
        try:
            self.session.commit()
            return book
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"Book with ISBN '{isbn}' already exists")

    def check_update(self, book_id: int, fields: dict) -> None:
        """Validate an update without writing anything.

        Raises:
            ValueError: If a copy count or unknown field is passed, a required
                        field is empty, or the new ISBN belongs to another book
        """
        forbidden = set(fields) - UPDATABLE_FIELDS
        if forbidden:
            raise ValueError(f"Fields cannot be updated through the catalog: {', '.join(sorted(forbidden))}")

        for key in REQUIRED_FIELDS:
            if key in fields and not fields[key]:
                raise ValueError(f"Book {key} cannot be empty")

        isbn = fields.get('isbn')
        if isbn is not None:
            existing = self.get_by_isbn(isbn)
            if existing and existing.id != book_id:
                raise ValueError(f"Book with ISBN '{isbn}' already exists")

    def update_book(self, book_id: int, **fields: Any) -> Optional[Book]:
        """Update descriptive fields of a book.

        Args:
            book_id: The ID of the book to update
            fields: New values; only descriptive fields are accepted

        Returns:
            The updated Book object if found, None otherwise

        Raises:
            ValueError: If the update fails ``check_update``
        """
        self.check_update(book_id, fields)

        book = self.get_by_id(book_id)
        if not book:
            return None

        for key, value in fields.items():
            setattr(book, key, value)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ValueError("Book update conflicts with another catalog entry")
        return book

    def delete_book(self, book_id: int) -> bool:
        """Delete a book.

        Loans that reference the book are kept.

        Returns:
            True if the book was deleted, False if not found
        """
        book = self.get_by_id(book_id)
        if not book:
            return False
        self.session.delete(book)
        self.session.commit()
        return True
