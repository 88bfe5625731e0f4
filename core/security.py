# core/security.py
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from core.sa.models import User

HASH_METHOD = "pbkdf2:sha256"


def hash_password(password: str) -> str:
    """Return a salted hash suitable for ``User.password_hash``."""
    return generate_password_hash(password, method=HASH_METHOD)


class CredentialVerifier:
    """Checks a username/password pair against the stored salted hashes."""

    def __init__(self, session: Session):
        self.session = session

    def verify(self, username: str, password: str) -> Optional[User]:
        """Return the matching user, or None when either value is wrong.

        An unknown username and a wrong password are indistinguishable to the
        caller.
        """
        if not username or not password:
            return None
        user = self.session.scalars(select(User).where(User.username == username)).first()
        if user is None:
            return None
        if not check_password_hash(user.password_hash, password):
            return None
        return user
