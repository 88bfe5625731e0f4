# tests/test_sa/test_repositories/test_book_repository.py

import pytest
from core.sa.models import Book, Loan

def test_create_book_defaults_available_to_total(book_repo):
    """Test creating a book without an explicit shelf count."""
    book = book_repo.create_book(title="Dune", author="Frank Herbert", isbn="9780441013593", total_copies=4)
    assert book.id is not None
    assert book.total_copies == 4
    assert book.available_copies == 4

def test_create_book_with_details(book_repo):
    book = book_repo.create_book(
        title="Dune",
        author="Frank Herbert",
        isbn="9780441013593",
        category="Science Fiction",
        publish_year=1965,
        description="Desert planet",
        cover_image="http://example.com/dune.jpg"
    )
    assert book.category == "Science Fiction"
    assert book.publish_year == 1965
    assert book.total_copies == 1
    assert book.available_copies == 1

def test_create_duplicate_isbn(book_repo, sample_book):
    """Test that creating a book with a duplicate ISBN raises an error."""
    with pytest.raises(ValueError, match="Book with ISBN 'X' already exists"):
        book_repo.create_book(title="Other", author="Someone", isbn="X")

def test_create_book_with_too_many_available(book_repo):
    with pytest.raises(ValueError, match="Available copies"):
        book_repo.create_book(title="Dune", author="Frank Herbert", isbn="1", total_copies=1, available_copies=2)

def test_create_book_with_negative_total(book_repo):
    with pytest.raises(ValueError, match="cannot be negative"):
        book_repo.create_book(title="Dune", author="Frank Herbert", isbn="1", total_copies=-1)

def test_create_book_with_unknown_field(book_repo):
    with pytest.raises(ValueError, match="Unknown book fields"):
        book_repo.create_book(title="Dune", author="Frank Herbert", isbn="1", pages=412)

def test_get_by_id(book_repo, sample_book):
    fetched = book_repo.get_by_id(sample_book.id)
    assert fetched is not None
    assert fetched.title == "Test Book"

def test_get_by_nonexistent_id(book_repo):
    assert book_repo.get_by_id(999) is None

def test_get_by_isbn(book_repo, sample_book):
    assert book_repo.get_by_isbn("X").id == sample_book.id
    assert book_repo.get_by_isbn("missing") is None

def test_get_all_in_store_order(book_repo):
    for i in range(3):
        book_repo.create_book(title=f"Book {i}", author="Author", isbn=f"isbn-{i}")
    books = book_repo.get_all()
    assert [b.title for b in books] == ["Book 0", "Book 1", "Book 2"]
    assert book_repo.count_books() == 3

def test_update_book(book_repo, sample_book):
    updated = book_repo.update_book(sample_book.id, title="New Title", category="Updated")
    assert updated is not None
    assert updated.title == "New Title"
    assert updated.category == "Updated"
    assert updated.isbn == "X"

def test_update_book_nonexistent(book_repo):
    assert book_repo.update_book(999, title="Nothing") is None

def test_update_book_rejects_copy_counts(book_repo, sample_book):
    """Shelf counts belong to the loan ledger."""
    with pytest.raises(ValueError, match="available_copies"):
        book_repo.update_book(sample_book.id, available_copies=0)
    with pytest.raises(ValueError, match="total_copies"):
        book_repo.update_book(sample_book.id, total_copies=10)

def test_update_book_to_taken_isbn(book_repo, sample_book):
    other = book_repo.create_book(title="Other", author="Someone", isbn="Y")
    with pytest.raises(ValueError, match="already exists"):
        book_repo.update_book(other.id, isbn="X")

def test_update_book_same_isbn(book_repo, sample_book):
    updated = book_repo.update_book(sample_book.id, isbn="X", title="Same ISBN")
    assert updated.title == "Same ISBN"

def test_update_book_empty_title(book_repo, sample_book):
    with pytest.raises(ValueError, match="title cannot be empty"):
        book_repo.update_book(sample_book.id, title="")

def test_delete_book(book_repo, sample_book):
    book_id = sample_book.id
    assert book_repo.delete_book(book_id) is True
    assert book_repo.get_by_id(book_id) is None

def test_delete_nonexistent_book(book_repo):
    assert book_repo.delete_book(999) is False

def test_delete_book_keeps_loans(book_repo, ledger, sample_book, sample_student, due_date, db_session):
    loan = ledger.issue_loan(sample_book.id, sample_student.id, due_date)
    loan_id = loan.id

    assert book_repo.delete_book(sample_book.id) is True

    db_session.expire_all()
    kept = db_session.get(Loan, loan_id)
    assert kept is not None
    assert kept.book is None
    assert kept.user.username == "student1"
    assert db_session.query(Book).count() == 0

def test_check_update_writes_nothing(book_repo, sample_book, db_session):
    other = book_repo.create_book(title="Other", author="Someone", isbn="Y")
    with pytest.raises(ValueError, match="already exists"):
        book_repo.check_update(other.id, {"isbn": "X"})
    with pytest.raises(ValueError, match="author cannot be empty"):
        book_repo.check_update(sample_book.id, {"author": ""})

    book_repo.check_update(sample_book.id, {"isbn": "X", "title": "Fine"})
    db_session.expire_all()
    assert book_repo.get_by_id(sample_book.id).title == "Test Book"

def test_deleted_id_is_not_reused(book_repo):
    first = book_repo.create_book(title="First", author="A", isbn="1")
    first_id = first.id
    book_repo.delete_book(first_id)

    second = book_repo.create_book(title="Second", author="B", isbn="2")
    assert second.id > first_id
