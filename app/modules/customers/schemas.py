from pydantic import BaseModel, Field, field_validator
from datetime import datetime, date
from typing import Optional, List
from enum import Enum
import re

MOBILE_PATTERN = re.compile(r"^\d{10}$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class GenderEnum(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    UNSPECIFIED = ""


def _clean_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value


def _clean_mobile(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not MOBILE_PATTERN.match(value):
        raise ValueError("Mobile number must be exactly 10 digits")
    return value


def _clean_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if not value:
        return None
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Enter a valid email address")
    return value


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else value


# ============ Customer Schemas ============

class CustomerBase(BaseModel):
    name: str = Field(..., max_length=200)
    mobile: str
    email: Optional[str] = None
    address: Optional[str] = None
    dob: Optional[date] = None
    gender: GenderEnum = GenderEnum.UNSPECIFIED
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("mobile")
    @classmethod
    def validate_mobile(cls, v):
        return _clean_mobile(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _clean_email(v)

    @field_validator("address", "notes")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    """Schema for updating customer (all optional)"""
    name: Optional[str] = Field(None, max_length=200)
    mobile: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[GenderEnum] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator("mobile")
    @classmethod
    def validate_mobile(cls, v):
        return _clean_mobile(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _clean_email(v)

    @field_validator("address", "notes")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class CustomerHistoryResponse(BaseModel):
    invoice_id: Optional[int] = None
    date: datetime
    total_amount: float
    paid_amount: float
    due_amount: float

    class Config:
        from_attributes = True


class CustomerResponse(CustomerBase):
    id: int
    loyalty_points: int
    total_due: float
    history: List[CustomerHistoryResponse] = []
    created_at: datetime

    class Config:
        from_attributes = True
