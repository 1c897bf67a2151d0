# invoicething/models/users.py

from typing import Optional

from pydantic import BaseModel, EmailStr


class UserSyncIn(BaseModel):
    subject_id: str
    email: EmailStr
    name: Optional[str] = None
    image_url: Optional[str] = None


class UserOut(BaseModel):
    id: int
    subject_id: str
    email: EmailStr
    name: Optional[str] = None
    image_url: Optional[str] = None
    created_at: int

    class Config:
        from_attributes = True
