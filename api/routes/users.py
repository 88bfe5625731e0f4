# api/routes/users.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.errors import InvalidCredentials
from core.sa.database import get_db
from core.sa.models import UserRole
from core.sa.repositories.user import UserRepository
from api.schemas.user import (
    LoginRequest, LoginResponse, UserSummary, BorrowerSchema, UserListResponse
)

router = APIRouter(prefix="/api", tags=["users"])

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Check a username and password.

    Returns the user's public profile; there is no session or token.
    """
    repo = UserRepository(db)
    user = repo.find_by_credentials(credentials.username, credentials.password)
    if user is None:
        raise InvalidCredentials()
    return LoginResponse(user=UserSummary.model_validate(user))

@router.get("/users/list", response_model=UserListResponse)
def get_borrowers(db: Session = Depends(get_db)):
    """Get every student (borrower)."""
    repo = UserRepository(db)
    users = repo.list_by_role(UserRole.STUDENT.value)
    return UserListResponse(users=[BorrowerSchema.model_validate(user) for user in users])
