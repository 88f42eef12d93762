from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base
import enum


class InvoiceStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class Invoice(Base):
    """Sales invoice. Totals are derived from the line items and GST rate."""
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(Integer, unique=True, index=True, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    subtotal = Column(Float, nullable=False)
    gst = Column(Float, default=3.0, nullable=False)  # percent
    gst_amount = Column(Float, default=0.0, nullable=False)
    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, default=0.0, nullable=False)
    due_amount = Column(Float, default=0.0, nullable=False)
    status = Column(SQLEnum(InvoiceStatus), default=InvoiceStatus.PENDING, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    customer = relationship("Customer", lazy="selectin")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        order_by="InvoiceItem.id",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self):
        return f"<Invoice(id={self.id}, number={self.invoice_number}, total={self.total_amount})>"


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    weight = Column(Float, nullable=False)
    rate = Column(Float, nullable=False)
    making_charge = Column(Float, default=0.0, nullable=False)
    total_price = Column(Float, nullable=False)

    invoice = relationship("Invoice", back_populates="items")
