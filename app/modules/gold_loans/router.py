from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.gold_loans import schemas
from app.modules.gold_loans.services import GoldLoanService

router = APIRouter(prefix="/api/gold-loans", tags=["gold-loans"])


@router.post("/", response_model=schemas.GoldLoanResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(
    data: schemas.GoldLoanCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a gold loan against pledged items.

    - Loan amount may not exceed 80% of the pledged items' market value
    - Assigns the next GL loan number
    """
    service = GoldLoanService(db)
    return await service.create_loan(data)


@router.get("/", response_model=List[schemas.GoldLoanResponse])
async def read_loans(
    customer_id: Optional[int] = Query(None),
    status: Optional[schemas.GoldLoanStatusEnum] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Get all loans, newest first, optionally filtered by customer or status"""
    service = GoldLoanService(db)
    return await service.get_loans(
        customer_id=customer_id,
        status=status.value if status else None
    )


@router.get("/{loan_id}", response_model=schemas.GoldLoanResponse)
async def read_loan(
    loan_id: int,
    db: AsyncSession = Depends(get_db)
):
    service = GoldLoanService(db)
    return await service.get_loan(loan_id)


@router.post("/{loan_id}/repayment", response_model=schemas.GoldLoanResponse)
async def add_repayment(
    loan_id: int,
    data: schemas.GoldLoanRepaymentRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Add a repayment to an active loan.

    - One month of interest on the original principal is paid first
    - The rest reduces the remaining amount; the loan closes at zero
    """
    service = GoldLoanService(db)
    return await service.add_repayment(loan_id, data)


@router.put("/{loan_id}/status", response_model=schemas.GoldLoanResponse)
async def update_loan_status(
    loan_id: int,
    data: schemas.GoldLoanStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update loan status (for renewal or default)"""
    service = GoldLoanService(db)
    return await service.update_status(loan_id, data)
