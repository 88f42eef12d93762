from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum

from app.modules.customers.schemas import CustomerResponse


class GoldLoanStatusEnum(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DEFAULTED = "defaulted"
    RENEWED = "renewed"


class PledgedItemTypeEnum(str, Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    DIAMOND = "Diamond"


# ============ Pledged Item Schemas ============

class PledgedItemBase(BaseModel):
    item_type: PledgedItemTypeEnum
    description: Optional[str] = None
    weight: float = Field(..., ge=0)
    purity: float
    market_value: float = Field(..., ge=0)

    class Config:
        allow_inf_nan = False


class PledgedItemCreate(PledgedItemBase):
    pass


class PledgedItemResponse(PledgedItemBase):
    id: int

    class Config:
        from_attributes = True


# ============ Gold Loan Schemas ============

class GoldLoanCreate(BaseModel):
    customer_id: int
    loan_amount: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, le=100, description="Annual interest rate in percent")
    duration: int = Field(..., ge=1, description="Duration in months")
    start_date: Optional[datetime] = None
    items: List[PledgedItemCreate] = Field(..., min_length=1)

    class Config:
        allow_inf_nan = False


class GoldLoanRepaymentRequest(BaseModel):
    amount: float = Field(..., gt=0)
    date: Optional[datetime] = None

    class Config:
        allow_inf_nan = False


class GoldLoanStatusUpdate(BaseModel):
    status: str
    reason: Optional[str] = None


class LoanRepaymentResponse(BaseModel):
    date: datetime
    amount: float
    interest_paid: float
    principal_paid: float
    remaining_balance: float

    class Config:
        from_attributes = True


class GoldLoanResponse(BaseModel):
    id: int
    loan_number: str
    customer_id: int
    customer: Optional[CustomerResponse] = None
    loan_amount: float
    interest_rate: float
    duration: int
    start_date: datetime
    end_date: datetime
    items: List[PledgedItemResponse]
    total_items_value: float
    repayments: List[LoanRepaymentResponse] = []
    status: GoldLoanStatusEnum
    status_reason: Optional[str] = None
    remaining_amount: float
    next_payment_due: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
