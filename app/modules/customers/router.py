from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.customers import schemas
from app.modules.customers.services import CustomerService

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post("/", response_model=schemas.CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: schemas.CustomerCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a customer profile.

    - Mobile number must be exactly 10 digits and unique
    - Email is stored lowercased
    """
    service = CustomerService(db)
    return await service.create_customer(data)


@router.get("/", response_model=List[schemas.CustomerResponse])
async def read_customers(
    mobile: Optional[str] = Query(None, description="Look up a single customer by mobile number"),
    db: AsyncSession = Depends(get_db)
):
    """Get all customers, or search by mobile number"""
    service = CustomerService(db)
    return await service.get_customers(mobile=mobile)


@router.get("/{customer_id}", response_model=schemas.CustomerResponse)
async def read_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db)
):
    service = CustomerService(db)
    return await service.get_customer_or_404(customer_id)


@router.put("/{customer_id}", response_model=schemas.CustomerResponse)
async def update_customer(
    customer_id: int,
    data: schemas.CustomerUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = CustomerService(db)
    return await service.update_customer(customer_id, data)


@router.delete("/{customer_id}", status_code=status.HTTP_200_OK)
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete a customer without invoices or gold loans"""
    service = CustomerService(db)
    await service.delete_customer(customer_id)
    return {"message": "Customer deleted successfully"}
