from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum

from app.modules.customers.schemas import CustomerResponse


class InvoiceStatusEnum(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


# ============ Invoice Item Schemas ============

class InvoiceItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    weight: float = Field(..., ge=0)
    rate: float = Field(..., ge=0)
    making_charge: float = Field(default=0.0, ge=0)

    class Config:
        allow_inf_nan = False


class InvoiceItemCreate(InvoiceItemBase):
    pass


class InvoiceItemResponse(InvoiceItemBase):
    total_price: float

    class Config:
        from_attributes = True


# ============ Invoice Schemas ============

class InvoiceCreate(BaseModel):
    customer_id: int
    items: List[InvoiceItemCreate] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    paid_amount: float = Field(default=0.0, ge=0)
    gst: Optional[float] = Field(default=None, ge=0, le=100, description="GST percent; shop default when omitted")
    date: Optional[datetime] = None

    class Config:
        allow_inf_nan = False


class InvoiceResponse(BaseModel):
    id: int
    invoice_number: int
    date: datetime
    customer_id: int
    customer: Optional[CustomerResponse] = None
    items: List[InvoiceItemResponse]
    subtotal: float
    gst: float
    gst_amount: float
    total_amount: float
    paid_amount: float
    due_amount: float
    status: InvoiceStatusEnum
    created_at: datetime

    class Config:
        from_attributes = True
