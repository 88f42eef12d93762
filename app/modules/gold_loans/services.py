from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple, Sequence
from datetime import datetime, timezone
from dateutil.relativedelta import relativedelta
import logging

from app.core.config import settings
from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.core.sequencing import next_sequence_code
from app.modules.customers.services import CustomerService
from app.modules.gold_loans.models import (
    GoldLoan, PledgedItem, LoanRepayment, GoldLoanStatus, PledgedItemType
)
from app.modules.gold_loans.schemas import GoldLoanCreate, GoldLoanRepaymentRequest, GoldLoanStatusUpdate

logger = logging.getLogger(__name__)

LOAN_NUMBER_PREFIX = "GL"


# ============ Collateral valuation ============

def value_collateral(items: Sequence) -> float:
    """Total appraised market value of the pledged items"""
    return sum(item.market_value for item in items)


def max_loan_amount(total_items_value: float, ratio: Optional[float] = None) -> float:
    if ratio is None:
        ratio = settings.MAX_LOAN_TO_VALUE
    return total_items_value * ratio


def check_loan_to_value(loan_amount: float, total_items_value: float, ratio: Optional[float] = None) -> float:
    """Raise ValidationError when the loan exceeds the loan-to-value ceiling; returns the ceiling"""
    ceiling = max_loan_amount(total_items_value, ratio)
    if loan_amount > ceiling:
        raise ValidationError(
            f"Loan amount exceeds maximum allowed value ({ceiling})",
            {"max_loan_amount": ceiling, "total_items_value": total_items_value}
        )
    return ceiling


# ============ Schedule and repayment ============

def loan_schedule(start_date: datetime, duration: int) -> Tuple[datetime, datetime]:
    """Returns (end_date, first payment due date)"""
    return start_date + relativedelta(months=duration), start_date + relativedelta(months=1)


def monthly_interest(loan_amount: float, interest_rate: float) -> float:
    """One month of simple interest on the original principal"""
    return (loan_amount * interest_rate) / (12 * 100)


def split_repayment(
    loan_amount: float,
    interest_rate: float,
    remaining_amount: float,
    amount: float
) -> Tuple[float, float, float]:
    """
    Split a payment into interest and principal.

    Interest is always computed on the original ``loan_amount``, not on the
    declining balance. Returns (interest_paid, principal_paid, remaining_balance).
    """
    interest_paid = min(monthly_interest(loan_amount, interest_rate), amount)
    principal_paid = amount - interest_paid
    return interest_paid, principal_paid, remaining_amount - principal_paid


def apply_repayment(loan: GoldLoan, amount: float, paid_on: datetime) -> LoanRepayment:
    """
    Record a repayment on an active loan.

    Appends the repayment, moves ``remaining_amount``, closes the loan once
    nothing remains and pushes ``next_payment_due`` one month past ``paid_on``.
    """
    current_status = GoldLoanStatus(loan.status)
    if current_status != GoldLoanStatus.ACTIVE:
        raise ConflictError(
            f"Cannot add repayment to {current_status.value} loan",
            {"status": current_status.value}
        )

    interest_paid, principal_paid, remaining_balance = split_repayment(
        loan.loan_amount, loan.interest_rate, loan.remaining_amount, amount
    )

    repayment = LoanRepayment(
        date=paid_on,
        amount=amount,
        interest_paid=interest_paid,
        principal_paid=principal_paid,
        remaining_balance=remaining_balance
    )
    loan.repayments.append(repayment)

    loan.remaining_amount = remaining_balance
    if remaining_balance <= 0:
        loan.status = GoldLoanStatus.CLOSED

    loan.next_payment_due = paid_on + relativedelta(months=1)
    return repayment


class GoldLoanService:
    """Service layer for gold loans"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_loan(self, data: GoldLoanCreate) -> GoldLoan:
        customers = CustomerService(self.db)
        customer = await customers.get_customer_or_404(data.customer_id)

        total_items_value = value_collateral(data.items)
        try:
            check_loan_to_value(data.loan_amount, total_items_value)
        except ValidationError:
            logger.warning(
                f"Gold loan for customer {customer.id} rejected: "
                f"{data.loan_amount} against collateral worth {total_items_value}"
            )
            raise

        start_date = data.start_date or datetime.now(timezone.utc)
        end_date, next_payment_due = loan_schedule(start_date, data.duration)
        loan_number = await next_sequence_code(self.db, GoldLoan.loan_number, LOAN_NUMBER_PREFIX)

        loan = GoldLoan(
            customer=customer,
            loan_number=loan_number,
            loan_amount=data.loan_amount,
            interest_rate=data.interest_rate,
            duration=data.duration,
            start_date=start_date,
            end_date=end_date,
            items=[
                PledgedItem(
                    item_type=PledgedItemType(item.item_type.value),
                    description=item.description,
                    weight=item.weight,
                    purity=item.purity,
                    market_value=item.market_value
                )
                for item in data.items
            ],
            total_items_value=total_items_value,
            status=GoldLoanStatus.ACTIVE,
            remaining_amount=data.loan_amount,
            next_payment_due=next_payment_due
        )
        self.db.add(loan)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Loan number {loan_number} was taken concurrently, retry the request")

        await self.db.refresh(loan)
        logger.info(f"Gold loan {loan.loan_number} created for customer {customer.id}: {loan.loan_amount}")
        return loan

    async def get_loan(self, loan_id: int) -> GoldLoan:
        result = await self.db.execute(select(GoldLoan).where(GoldLoan.id == loan_id))
        loan = result.scalar_one_or_none()
        if not loan:
            raise NotFoundError("Loan not found")
        return loan

    async def get_loans(
        self,
        customer_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[GoldLoan]:
        query = select(GoldLoan)
        if customer_id:
            query = query.where(GoldLoan.customer_id == customer_id)
        if status:
            query = query.where(GoldLoan.status == GoldLoanStatus(status))
        query = query.order_by(GoldLoan.created_at.desc(), GoldLoan.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add_repayment(self, loan_id: int, data: GoldLoanRepaymentRequest) -> GoldLoan:
        loan = await self.get_loan(loan_id)
        paid_on = data.date or datetime.now(timezone.utc)

        try:
            repayment = apply_repayment(loan, data.amount, paid_on)
        except ConflictError as e:
            logger.warning(f"Repayment on gold loan {loan.loan_number} rejected: {e.message}")
            raise

        await self.db.commit()
        await self.db.refresh(loan)

        logger.info(
            f"Repayment of {repayment.amount} on gold loan {loan.loan_number}: "
            f"interest {repayment.interest_paid}, principal {repayment.principal_paid}, "
            f"remaining {loan.remaining_amount}"
        )
        if loan.status == GoldLoanStatus.CLOSED:
            logger.info(f"Gold loan {loan.loan_number} closed")
        return loan

    async def update_status(self, loan_id: int, data: GoldLoanStatusUpdate) -> GoldLoan:
        """Set the loan status. Any listed status is accepted from any current status."""
        loan = await self.get_loan(loan_id)

        allowed = [s.value for s in GoldLoanStatus]
        if data.status not in allowed:
            raise ValidationError("Invalid status", {"allowed": allowed})

        previous = GoldLoanStatus(loan.status)

        loan.status = GoldLoanStatus(data.status)
        loan.status_reason = data.reason

        await self.db.commit()
        await self.db.refresh(loan)
        logger.info(
            f"Gold loan {loan.loan_number} status {previous.value} -> {data.status}"
            + (f" ({data.reason})" if data.reason else "")
        )
        return loan
