from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base
import enum


class GoldLoanStatus(str, enum.Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DEFAULTED = "defaulted"
    RENEWED = "renewed"


class PledgedItemType(str, enum.Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    DIAMOND = "Diamond"


class GoldLoan(Base):
    """
    Loan secured by pledged jewelry.
    Interest is simple: each repayment first covers one month of interest on
    the original principal, the rest reduces the remaining amount.
    """
    __tablename__ = "gold_loans"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    loan_number = Column(String(20), unique=True, index=True, nullable=False)  # GL000001

    # Terms
    loan_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)  # annual percent
    duration = Column(Integer, nullable=False)  # months
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)

    # Collateral
    total_items_value = Column(Float, nullable=False)

    # Running state
    status = Column(SQLEnum(GoldLoanStatus), default=GoldLoanStatus.ACTIVE, nullable=False, index=True)
    status_reason = Column(Text, nullable=True)
    remaining_amount = Column(Float, nullable=False)
    next_payment_due = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    customer = relationship("Customer", lazy="selectin")
    items = relationship(
        "PledgedItem",
        back_populates="loan",
        order_by="PledgedItem.id",
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    repayments = relationship(
        "LoanRepayment",
        back_populates="loan",
        order_by="LoanRepayment.id",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self):
        return f"<GoldLoan(id={self.id}, number={self.loan_number}, status={self.status})>"


class PledgedItem(Base):
    """Jewelry held as collateral"""
    __tablename__ = "gold_loan_items"

    id = Column(Integer, primary_key=True, index=True)
    loan_id = Column(Integer, ForeignKey("gold_loans.id"), nullable=False, index=True)
    item_type = Column(SQLEnum(PledgedItemType), nullable=False)
    description = Column(Text, nullable=True)
    weight = Column(Float, nullable=False)  # grams
    purity = Column(Float, nullable=False)  # karat for gold
    market_value = Column(Float, nullable=False)

    loan = relationship("GoldLoan", back_populates="items")


class LoanRepayment(Base):
    """Repayment event. Rows are only ever inserted."""
    __tablename__ = "gold_loan_repayments"

    id = Column(Integer, primary_key=True, index=True)
    loan_id = Column(Integer, ForeignKey("gold_loans.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
    amount = Column(Float, nullable=False)
    interest_paid = Column(Float, nullable=False)
    principal_paid = Column(Float, nullable=False)
    remaining_balance = Column(Float, nullable=False)

    loan = relationship("GoldLoan", back_populates="repayments")
