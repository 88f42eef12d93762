from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.invoices import schemas
from app.modules.invoices.services import InvoiceService

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post("/", response_model=schemas.InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    data: schemas.InvoiceCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new invoice and update customer history.

    - Line total = weight x rate + making charge
    - Supplied total must match subtotal + GST within tolerance
    - Customer dues and loyalty points are updated in the same transaction
    """
    service = InvoiceService(db)
    return await service.create_invoice(data)


@router.get("/", response_model=List[schemas.InvoiceResponse])
async def read_invoices(
    customer_id: Optional[int] = Query(None),
    status: Optional[schemas.InvoiceStatusEnum] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Get all invoices with customer data, newest first"""
    service = InvoiceService(db)
    return await service.get_invoices(
        customer_id=customer_id,
        status=status.value if status else None
    )


@router.get("/{invoice_id}", response_model=schemas.InvoiceResponse)
async def read_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_db)
):
    service = InvoiceService(db)
    return await service.get_invoice(invoice_id)
