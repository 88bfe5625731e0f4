# api/routes/loans.py

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.errors import NotFound, Unavailable, AlreadyReturned
from core.sa.database import get_db
from core.services.loan_ledger import LoanLedger, LoanFilter
from api.schemas.loan import LoanCreate, LoanSchema, LoanResponse, LoanListResponse

router = APIRouter(prefix="/api/loans", tags=["loans"])

def get_ledger(db: Session = Depends(get_db)) -> LoanLedger:
    return LoanLedger(db)

@router.get("", response_model=LoanListResponse)
def get_loans(
    user_id: Optional[int] = Query(None, alias="userId", description="Borrower whose loans to list"),
    role: Optional[str] = Query(None, description="Role of the caller (admin or student)"),
    ledger: LoanLedger = Depends(get_ledger)
):
    """
    List loans with book and borrower details.

    Students only see loans for their own userId; admins see every loan and
    the userId parameter is ignored.
    """
    try:
        loan_filter = LoanFilter.from_role(role, user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    loans = ledger.list_loans(loan_filter)
    return LoanListResponse(loans=[LoanSchema.from_model(loan) for loan in loans])

@router.post("", response_model=LoanResponse)
def create_loan(payload: LoanCreate, ledger: LoanLedger = Depends(get_ledger)):
    try:
        loan = ledger.issue_loan(payload.book_id, payload.user_id, payload.due_date)
    except (NotFound, Unavailable) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return LoanResponse(loan=LoanSchema.from_model(loan))

@router.put("/{loan_id}/return", response_model=LoanResponse)
def return_loan(loan_id: int, ledger: LoanLedger = Depends(get_ledger)):
    try:
        loan = ledger.return_loan(loan_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except AlreadyReturned as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return LoanResponse(loan=LoanSchema.from_model(loan))
