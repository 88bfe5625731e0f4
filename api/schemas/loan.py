# api/schemas/loan.py
from datetime import datetime
from typing import Optional, List
from .base import CamelModel, Envelope
from .book import BookSchema
from .user import BorrowerSchema
from core.sa.models import Loan, LoanStatus

class LoanCreate(CamelModel):
    book_id: int
    user_id: int
    due_date: datetime

class LoanSchema(CamelModel):
    id: int
    book_id: int
    user_id: int
    loan_date: datetime
    due_date: datetime
    return_date: Optional[datetime] = None
    status: str
    overdue: bool = False
    created_at: datetime
    book: Optional[BookSchema] = None
    user: Optional[BorrowerSchema] = None

    @classmethod
    def from_model(cls, loan: Loan, now: Optional[datetime] = None) -> "LoanSchema":
        """Build the response view of a loan, with the derived status and joined details."""
        status = loan.status_at(now)
        return cls(
            id=loan.id,
            book_id=loan.book_id,
            user_id=loan.user_id,
            loan_date=loan.loan_date,
            due_date=loan.due_date,
            return_date=loan.return_date,
            status=status,
            overdue=status == LoanStatus.OVERDUE.value,
            created_at=loan.created_at,
            book=BookSchema.model_validate(loan.book) if loan.book else None,
            user=BorrowerSchema.model_validate(loan.user) if loan.user else None
        )

class LoanResponse(Envelope):
    loan: LoanSchema

class LoanListResponse(Envelope):
    loans: List[LoanSchema]
