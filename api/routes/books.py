# api/routes/books.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.errors import NotFound, InventoryConflict
from core.sa.database import get_db
from core.sa.repositories.book import BookRepository
from core.services.loan_ledger import LoanLedger
from api.schemas.base import MessageResponse
from api.schemas.book import BookCreate, BookUpdate, BookSchema, BookResponse, BookListResponse

router = APIRouter(prefix="/api/books", tags=["books"])

@router.get("", response_model=BookListResponse)
def get_books(db: Session = Depends(get_db)):
    """Get every book in the catalog."""
    repo = BookRepository(db)
    books = repo.get_all()
    return BookListResponse(books=[BookSchema.model_validate(book) for book in books])

@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: int, db: Session = Depends(get_db)):
    repo = BookRepository(db)
    book = repo.get_by_id(book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return BookResponse(book=BookSchema.model_validate(book))

@router.post("", response_model=BookResponse)
def create_book(payload: BookCreate, db: Session = Depends(get_db)):
    """
    Add a book to the catalog.

    availableCopies defaults to totalCopies when omitted.
    """
    repo = BookRepository(db)
    try:
        book = repo.create_book(**payload.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return BookResponse(book=BookSchema.model_validate(book))

@router.put("/{book_id}", response_model=BookResponse)
def update_book(book_id: int, payload: BookUpdate, db: Session = Depends(get_db)):
    """
    Update a book's details.

    A new totalCopies is applied through the loan ledger, which shifts
    availableCopies by the same amount and refuses to drop below the copies
    currently on loan.
    """
    repo = BookRepository(db)
    if repo.get_by_id(book_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    changes = payload.model_dump(exclude_unset=True)
    total_copies = changes.pop("total_copies", None)

    # Reject bad details before the copy count is committed
    try:
        repo.check_update(book_id, changes)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if total_copies is not None:
        try:
            LoanLedger(db).resize_inventory(book_id, total_copies)
        except NotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
        except InventoryConflict as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        book = repo.update_book(book_id, **changes)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return BookResponse(book=BookSchema.model_validate(book))

@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(book_id: int, db: Session = Depends(get_db)):
    repo = BookRepository(db)
    if not repo.delete_book(book_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return MessageResponse(message="Book deleted")
