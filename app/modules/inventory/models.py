from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base
import enum


class InventoryItemType(str, enum.Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    DIAMOND = "Diamond"
    PLATINUM = "Platinum"
    OTHER = "Other"


class InventoryCategory(str, enum.Enum):
    ORNAMENT = "Ornament"
    BULLION = "Bullion"
    LOOSE_STONE = "Loose Stone"
    RAW_MATERIAL = "Raw Material"


class StockUnit(str, enum.Enum):
    GRAM = "gram"
    CARAT = "carat"
    PIECE = "piece"


class StockStatus(str, enum.Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    ORDERED = "ordered"


class StockTransactionType(str, enum.Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    RETURN = "return"
    ADJUSTMENT = "adjustment"


class InventoryItem(Base):
    """
    Stock item. Status follows quantity against reorder level.
    """
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    item_code = Column(String(20), unique=True, index=True, nullable=False)  # GO000001
    item_type = Column(SQLEnum(InventoryItemType), nullable=False, index=True)
    category = Column(SQLEnum(InventoryCategory), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    weight = Column(Float, nullable=False)
    unit = Column(SQLEnum(StockUnit), nullable=False)
    purity = Column(Float, nullable=False)  # karat for gold/platinum, percent for silver

    purchase_price = Column(Float, nullable=False)
    selling_price = Column(Float, nullable=False)
    making_charges = Column(Float, default=0.0, nullable=False)

    quantity = Column(Integer, nullable=False)
    reorder_level = Column(Integer, nullable=False)

    supplier_name = Column(String(200), nullable=True)
    supplier_contact = Column(String(100), nullable=True)
    supplier_invoice_number = Column(String(100), nullable=True)

    location = Column(String(100), nullable=False)
    status = Column(SQLEnum(StockStatus), default=StockStatus.IN_STOCK, nullable=False, index=True)
    images = Column(JSON, nullable=True)  # ["https://.../ring.jpg"]

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    transactions = relationship(
        "StockTransaction",
        back_populates="item",
        order_by="StockTransaction.id",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    @property
    def supplier(self):
        if not (self.supplier_name or self.supplier_contact or self.supplier_invoice_number):
            return None
        return {
            "name": self.supplier_name,
            "contact": self.supplier_contact,
            "invoice_number": self.supplier_invoice_number,
        }

    def __repr__(self):
        return f"<InventoryItem(id={self.id}, code={self.item_code}, quantity={self.quantity})>"


class StockTransaction(Base):
    """Stock movement against an inventory item"""
    __tablename__ = "inventory_transactions"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
    transaction_type = Column(SQLEnum(StockTransactionType), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=True)
    reference = Column(String(100), nullable=True)  # invoice or PO number
    notes = Column(Text, nullable=True)

    item = relationship("InventoryItem", back_populates="transactions")
