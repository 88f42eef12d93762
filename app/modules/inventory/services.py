from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, case
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
import logging

from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.core.sequencing import next_sequence_code
from app.modules.inventory.models import (
    InventoryItem, StockTransaction, InventoryItemType, InventoryCategory,
    StockUnit, StockStatus, StockTransactionType
)
from app.modules.inventory.schemas import (
    InventoryItemCreate, InventoryItemUpdate, StockTransactionCreate, InventoryStats
)

logger = logging.getLogger(__name__)

INBOUND_TRANSACTIONS = (StockTransactionType.PURCHASE, StockTransactionType.RETURN)


def item_code_prefix(item_type: InventoryItemType) -> str:
    """First two letters of the item type, e.g. Gold -> GO"""
    return InventoryItemType(item_type).value[:2].upper()


def stock_status(quantity: int, reorder_level: int, on_order: bool = False) -> StockStatus:
    """
    Status from quantity against reorder level.

    ``on_order`` keeps a low or empty item marked as ordered until
    stock rises above the reorder level.
    """
    if on_order and quantity <= reorder_level:
        return StockStatus.ORDERED
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= reorder_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def stock_alerts(item: InventoryItem) -> List[Dict[str, str]]:
    status = StockStatus(item.status)
    if status == StockStatus.LOW_STOCK:
        return [{"type": "warning", "message": f"Quantity below reorder level ({item.reorder_level})"}]
    if status == StockStatus.OUT_OF_STOCK:
        return [{"type": "error", "message": "Item out of stock"}]
    return []


def quantity_change(transaction_type: StockTransactionType, quantity: int) -> int:
    if StockTransactionType(transaction_type) in INBOUND_TRANSACTIONS:
        return quantity
    return -quantity


class InventoryService:
    """Service layer for stock items"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        item_type = InventoryItemType(data.item_type.value)
        item_code = await next_sequence_code(self.db, InventoryItem.item_code, item_code_prefix(item_type))
        supplier = data.supplier

        item = InventoryItem(
            item_code=item_code,
            item_type=item_type,
            category=InventoryCategory(data.category.value),
            name=data.name,
            description=data.description,
            weight=data.weight,
            unit=StockUnit(data.unit.value),
            purity=data.purity,
            purchase_price=data.purchase_price,
            selling_price=data.selling_price,
            making_charges=data.making_charges,
            quantity=data.quantity,
            reorder_level=data.reorder_level,
            supplier_name=supplier.name if supplier else None,
            supplier_contact=supplier.contact if supplier else None,
            supplier_invoice_number=supplier.invoice_number if supplier else None,
            location=data.location,
            status=stock_status(data.quantity, data.reorder_level),
            images=list(data.images)
        )
        self.db.add(item)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Item code {item_code} was taken concurrently, retry the request")

        await self.db.refresh(item)
        logger.info(f"Inventory item {item.item_code} created with quantity {item.quantity}")
        return item

    async def get_item(self, item_id: int) -> InventoryItem:
        result = await self.db.execute(select(InventoryItem).where(InventoryItem.id == item_id))
        item = result.scalar_one_or_none()
        if not item:
            raise NotFoundError("Item not found")
        return item

    async def get_items(
        self,
        item_type: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[InventoryItem]:
        query = select(InventoryItem)
        if item_type:
            query = query.where(InventoryItem.item_type == InventoryItemType(item_type))
        if category:
            query = query.where(InventoryItem.category == InventoryCategory(category))
        if status:
            query = query.where(InventoryItem.status == StockStatus(status))
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    InventoryItem.name.ilike(pattern),
                    InventoryItem.item_code.ilike(pattern),
                    InventoryItem.description.ilike(pattern)
                )
            )
        query = query.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_item(self, item_id: int, data: InventoryItemUpdate) -> InventoryItem:
        item = await self.get_item(item_id)

        update_data = data.model_dump(exclude_unset=True, exclude={"supplier", "ordered"})
        enum_fields = {"category": InventoryCategory, "unit": StockUnit}
        for field, value in update_data.items():
            if value is None:
                continue
            if field in enum_fields:
                value = enum_fields[field](value)
            setattr(item, field, value)

        if "supplier" in data.model_fields_set:
            supplier = data.supplier
            item.supplier_name = supplier.name if supplier else None
            item.supplier_contact = supplier.contact if supplier else None
            item.supplier_invoice_number = supplier.invoice_number if supplier else None

        on_order = data.ordered if data.ordered is not None else item.status == StockStatus.ORDERED
        item.status = stock_status(item.quantity, item.reorder_level, on_order)

        await self.db.commit()
        await self.db.refresh(item)
        logger.info(f"Inventory item {item.item_code} updated: {sorted(data.model_fields_set)}")
        return item

    async def add_transaction(self, item_id: int, data: StockTransactionCreate) -> InventoryItem:
        """Record a stock movement and adjust quantity and status"""
        item = await self.get_item(item_id)
        transaction_type = StockTransactionType(data.transaction_type.value)

        if transaction_type == StockTransactionType.SALE and data.quantity > item.quantity:
            logger.warning(f"Sale of {data.quantity} on {item.item_code} rejected, {item.quantity} in stock")
            raise ValidationError(
                "Insufficient stock",
                {"available": item.quantity, "requested": data.quantity}
            )

        new_quantity = item.quantity + quantity_change(transaction_type, data.quantity)
        if new_quantity < 0:
            raise ValidationError(
                "Quantity cannot go below zero",
                {"available": item.quantity, "requested": data.quantity}
            )

        item.transactions.append(
            StockTransaction(
                date=datetime.now(timezone.utc),
                transaction_type=transaction_type,
                quantity=data.quantity,
                price=data.price,
                reference=data.reference,
                notes=data.notes
            )
        )
        item.quantity = new_quantity
        item.status = stock_status(new_quantity, item.reorder_level, item.status == StockStatus.ORDERED)

        await self.db.commit()
        await self.db.refresh(item)
        logger.info(
            f"Stock {transaction_type.value} of {data.quantity} on {item.item_code}: "
            f"quantity now {item.quantity} ({item.status.value})"
        )
        return item

    async def get_stock_alerts(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(InventoryItem)
            .where(InventoryItem.status.in_([StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK]))
            .order_by(InventoryItem.item_code)
        )
        alerts = []
        for item in result.scalars().all():
            if item.status == StockStatus.OUT_OF_STOCK:
                message = "Item is out of stock"
            else:
                message = f"Quantity ({item.quantity}) is below reorder level ({item.reorder_level})"
            alerts.append({
                "item_code": item.item_code,
                "name": item.name,
                "quantity": item.quantity,
                "reorder_level": item.reorder_level,
                "status": item.status,
                "message": message
            })
        return alerts

    async def get_stats(self) -> InventoryStats:
        result = await self.db.execute(
            select(
                func.count(InventoryItem.id),
                func.sum(InventoryItem.quantity * InventoryItem.selling_price),
                func.sum(case((InventoryItem.status == StockStatus.LOW_STOCK, 1), else_=0)),
                func.sum(case((InventoryItem.status == StockStatus.OUT_OF_STOCK, 1), else_=0))
            )
        )
        total_items, total_value, low_stock, out_of_stock = result.one()
        return InventoryStats(
            total_items=total_items or 0,
            total_value=float(total_value or 0),
            low_stock_items=low_stock or 0,
            out_of_stock_items=out_of_stock or 0
        )
