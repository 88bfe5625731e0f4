# api/schemas/user.py
from typing import Optional, List
from .base import CamelModel, Envelope

class LoginRequest(CamelModel):
    username: str
    password: str

class UserSummary(CamelModel):
    id: int
    username: str
    role: str
    name: str

class BorrowerSchema(CamelModel):
    id: int
    name: str
    username: str
    email: Optional[str] = None

class LoginResponse(Envelope):
    user: UserSummary

class UserListResponse(Envelope):
    users: List[BorrowerSchema]
