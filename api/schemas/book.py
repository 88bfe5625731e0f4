# api/schemas/book.py
from datetime import datetime
from typing import Optional, List
from pydantic import Field
from .base import CamelModel, Envelope

class BookBase(CamelModel):
    title: str
    author: str
    isbn: str
    category: Optional[str] = None
    publish_year: Optional[int] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None

class BookCreate(BookBase):
    total_copies: int = Field(1, ge=0)
    available_copies: Optional[int] = Field(None, ge=0)

class BookUpdate(CamelModel):
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    category: Optional[str] = None
    publish_year: Optional[int] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    total_copies: Optional[int] = Field(None, ge=0)

class BookSchema(BookBase):
    id: int
    total_copies: int
    available_copies: int
    created_at: datetime

class BookResponse(Envelope):
    book: BookSchema

class BookListResponse(Envelope):
    books: List[BookSchema]
