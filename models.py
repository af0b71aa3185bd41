from typing import Optional

from pydantic import BaseModel


class Contact(BaseModel):
    id: int
    name: str
    email: str
    phone: str


class ContactIn(BaseModel):
    """Request body for create and update. Every field may be omitted."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class Message(BaseModel):
    message: str
