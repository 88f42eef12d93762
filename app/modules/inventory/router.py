from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.inventory import schemas
from app.modules.inventory.services import InventoryService, stock_alerts

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post("/", response_model=schemas.InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: schemas.InventoryItemCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Add a new inventory item.

    - Item code is the type prefix plus the next number for that prefix
    - Status is derived from quantity and reorder level
    """
    service = InventoryService(db)
    return await service.create_item(data)


@router.get("/", response_model=List[schemas.InventoryItemWithAlerts])
async def read_items(
    item_type: Optional[schemas.InventoryItemTypeEnum] = Query(None),
    category: Optional[schemas.InventoryCategoryEnum] = Query(None),
    status: Optional[schemas.StockStatusEnum] = Query(None),
    search: Optional[str] = Query(None, description="Matches name, item code or description"),
    db: AsyncSession = Depends(get_db)
):
    """Get inventory items with filters and stock alerts"""
    service = InventoryService(db)
    items = await service.get_items(
        item_type=item_type.value if item_type else None,
        category=category.value if category else None,
        status=status.value if status else None,
        search=search
    )

    responses = []
    for item in items:
        response = schemas.InventoryItemWithAlerts.model_validate(item)
        response.alerts = [schemas.StockAlert(**alert) for alert in stock_alerts(item)]
        responses.append(response)
    return responses


@router.get("/alerts/stock", response_model=List[schemas.StockAlertSummary])
async def read_stock_alerts(db: AsyncSession = Depends(get_db)):
    """Items that are low on stock or out of stock"""
    service = InventoryService(db)
    return await service.get_stock_alerts()


@router.get("/stats/overview", response_model=schemas.InventoryStats)
async def read_inventory_stats(db: AsyncSession = Depends(get_db)):
    """Item count, stock value and low/out-of-stock counts"""
    service = InventoryService(db)
    return await service.get_stats()


@router.get("/{item_id}", response_model=schemas.InventoryItemResponse)
async def read_item(
    item_id: int,
    db: AsyncSession = Depends(get_db)
):
    service = InventoryService(db)
    return await service.get_item(item_id)


@router.put("/{item_id}", response_model=schemas.InventoryItemResponse)
async def update_item(
    item_id: int,
    data: schemas.InventoryItemUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = InventoryService(db)
    return await service.update_item(item_id, data)


@router.post("/{item_id}/transaction", response_model=schemas.InventoryItemResponse)
async def add_transaction(
    item_id: int,
    data: schemas.StockTransactionCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Record a purchase, sale, return or adjustment.

    - Purchases and returns add stock; sales and adjustments remove it
    - A sale larger than the stock on hand is rejected
    """
    service = InventoryService(db)
    return await service.add_transaction(item_id, data)
