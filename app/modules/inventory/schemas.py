from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum


class InventoryItemTypeEnum(str, Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    DIAMOND = "Diamond"
    PLATINUM = "Platinum"
    OTHER = "Other"


class InventoryCategoryEnum(str, Enum):
    ORNAMENT = "Ornament"
    BULLION = "Bullion"
    LOOSE_STONE = "Loose Stone"
    RAW_MATERIAL = "Raw Material"


class StockUnitEnum(str, Enum):
    GRAM = "gram"
    CARAT = "carat"
    PIECE = "piece"


class StockStatusEnum(str, Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    ORDERED = "ordered"


class StockTransactionTypeEnum(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    RETURN = "return"
    ADJUSTMENT = "adjustment"


class SupplierInfo(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    invoice_number: Optional[str] = None


# ============ Inventory Item Schemas ============

class InventoryItemBase(BaseModel):
    item_type: InventoryItemTypeEnum
    category: InventoryCategoryEnum
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    weight: float = Field(..., ge=0)
    unit: StockUnitEnum
    purity: float
    purchase_price: float = Field(..., ge=0)
    selling_price: float = Field(..., ge=0)
    making_charges: float = Field(default=0.0, ge=0)
    quantity: int = Field(..., ge=0)
    reorder_level: int = Field(..., ge=0)
    supplier: Optional[SupplierInfo] = None
    location: str = Field(..., min_length=1, max_length=100)
    images: List[str] = []

    class Config:
        allow_inf_nan = False


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(BaseModel):
    """Schema for updating an item (all optional). Item code and type are fixed."""
    category: Optional[InventoryCategoryEnum] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0)
    unit: Optional[StockUnitEnum] = None
    purity: Optional[float] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    making_charges: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    reorder_level: Optional[int] = Field(None, ge=0)
    supplier: Optional[SupplierInfo] = None
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    images: Optional[List[str]] = None
    ordered: Optional[bool] = Field(None, description="Mark a low or empty item as re-ordered")

    class Config:
        allow_inf_nan = False


class StockTransactionCreate(BaseModel):
    transaction_type: StockTransactionTypeEnum
    quantity: int = Field(..., gt=0)
    price: Optional[float] = Field(None, ge=0)
    reference: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        allow_inf_nan = False


class StockTransactionResponse(BaseModel):
    date: datetime
    transaction_type: StockTransactionTypeEnum
    quantity: int
    price: Optional[float] = None
    reference: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class StockAlert(BaseModel):
    type: str  # warning, error
    message: str


class InventoryItemResponse(InventoryItemBase):
    id: int
    item_code: str
    status: StockStatusEnum
    images: Optional[List[str]] = None
    transactions: List[StockTransactionResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryItemWithAlerts(InventoryItemResponse):
    alerts: List[StockAlert] = []


class StockAlertSummary(BaseModel):
    item_code: str
    name: str
    quantity: int
    reorder_level: int
    status: StockStatusEnum
    message: str


class InventoryStats(BaseModel):
    total_items: int = 0
    total_value: float = 0.0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
