from sqlalchemy import Column, Integer, String, Float, DateTime, Date, Text, Enum as SQLEnum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base
import enum


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    UNSPECIFIED = ""


class Customer(Base):
    """
    Shop customer profile.
    Billing history and dues are maintained from invoices.
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    mobile = Column(String(10), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    dob = Column(Date, nullable=True)
    gender = Column(SQLEnum(Gender), default=Gender.UNSPECIFIED, nullable=False)
    notes = Column(Text, nullable=True)

    # Loyalty system
    loyalty_points = Column(Integer, default=0, nullable=False)

    # Total outstanding dues across invoices
    total_due = Column(Float, default=0.0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    history = relationship(
        "CustomerHistoryEntry",
        back_populates="customer",
        order_by="CustomerHistoryEntry.id",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, name={self.name}, mobile={self.mobile})>"


class CustomerHistoryEntry(Base):
    """Billing history line, one per invoice"""
    __tablename__ = "customer_history"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False)
    due_amount = Column(Float, nullable=False)

    customer = relationship("Customer", back_populates="history")
