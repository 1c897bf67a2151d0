# invoicething/models/clients.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ClientIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    street_name: Optional[str] = None
    building_name: Optional[str] = None
    unit_number: Optional[str] = None
    postal_code: Optional[str] = None
    contact_person: Optional[str] = None


class ClientPatch(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    street_name: Optional[str] = None
    building_name: Optional[str] = None
    unit_number: Optional[str] = None
    postal_code: Optional[str] = None
    contact_person: Optional[str] = None


class ClientOut(BaseModel):
    id: int
    name: str
    email: Optional[EmailStr] = None
    street_name: Optional[str] = None
    building_name: Optional[str] = None
    unit_number: Optional[str] = None
    postal_code: Optional[str] = None
    contact_person: Optional[str] = None
    created_at: int
    updated_at: int

    class Config:
        from_attributes = True
