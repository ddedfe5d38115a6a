"""Pydantic schemas for student registration and profile endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class StudentCreate(BaseModel):
    """Registration payload for a new student."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    cpf: str = Field(..., description="CPF with or without punctuation.")
    rg: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = Field(None, max_length=255)
    institution_id: int
    course: Optional[str] = Field(None, max_length=255)


class StudentUpdate(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    name: Optional[str] = Field(None, max_length=255)
    cpf: Optional[str] = None
    rg: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = Field(None, max_length=255)
    institution_id: Optional[int] = None
    course: Optional[str] = Field(None, max_length=255)


class StudentRead(BaseModel):
    id: int
    user_id: int
    name: str
    email: str
    cpf: str
    rg: Optional[str]
    address: Optional[str]
    institution_id: int
    institution_name: Optional[str]
    course: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
