# Inventory module
from app.modules.inventory.models import (
    InventoryItem, StockTransaction, InventoryItemType, InventoryCategory,
    StockUnit, StockStatus, StockTransactionType
)
from app.modules.inventory.services import InventoryService
from app.modules.inventory.router import router

__all__ = [
    "InventoryItem", "StockTransaction", "InventoryItemType", "InventoryCategory",
    "StockUnit", "StockStatus", "StockTransactionType",
    "InventoryService", "router"
]
