# core/sa/repositories/user.py
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from core.sa.models import User, UserRole
from core.security import CredentialVerifier, hash_password

class UserRepository:
    """Repository for managing User entities (the borrower directory)."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session
        self.verifier = CredentialVerifier(session)

    def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: str = UserRole.STUDENT.value,
        email: Optional[str] = None
    ) -> User:
        """Create a new user.

        Args:
            username: Login name, unique
            password: Plain password; only its salted hash is stored
            name: Display name
            role: "admin" or "student"
            email: Optional email address

        Returns:
            The created User object

        Raises:
            ValueError: If the role is unknown or the username is taken
        """
        try:
            role = UserRole(role).value
        except ValueError:
            raise ValueError(f"Unknown role '{role}'")

        existing = self.get_by_username(username)
        if existing:
            raise ValueError(f"User with username '{username}' already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            name=name,
            email=email
        )
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with username '{username}' already exists")

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        """Return the user for a valid username/password pair, else None."""
        return self.verifier.verify(username, password)

    def list_by_role(self, role: str) -> List[User]:
        """List users with the given role in store order."""
        return list(
            self.session.scalars(
                select(User).where(User.role == role).order_by(User.id)
            )
        )
