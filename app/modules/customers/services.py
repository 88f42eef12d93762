from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
import logging
import math

from app.core.config import settings
from app.core.exceptions import NotFoundError, ConflictError
from app.modules.customers.models import Customer, CustomerHistoryEntry, Gender
from app.modules.customers.schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


def loyalty_points_for(paid_amount: float) -> int:
    """One point per LOYALTY_POINT_UNIT paid"""
    if paid_amount <= 0:
        return 0
    return math.floor(paid_amount / settings.LOYALTY_POINT_UNIT)


class CustomerService:
    """Service layer for customer profiles"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_customer(self, data: CustomerCreate) -> Customer:
        customer = Customer(
            name=data.name,
            mobile=data.mobile,
            email=data.email,
            address=data.address,
            dob=data.dob,
            gender=Gender(data.gender.value),
            notes=data.notes,
            loyalty_points=0,
            total_due=0.0
        )
        self.db.add(customer)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Customer with mobile {data.mobile} already exists")

        await self.db.refresh(customer)
        logger.info(f"Customer {customer.id} created")
        return customer

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        result = await self.db.execute(select(Customer).where(Customer.id == customer_id))
        return result.scalar_one_or_none()

    async def get_customer_or_404(self, customer_id: int) -> Customer:
        customer = await self.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Customer not found")
        return customer

    async def get_customers(self, mobile: Optional[str] = None) -> List[Customer]:
        """All customers, or the (at most one) customer with ``mobile``"""
        query = select(Customer)
        if mobile:
            query = query.where(Customer.mobile == mobile.strip())
        result = await self.db.execute(query.order_by(Customer.id))
        return list(result.scalars().all())

    async def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        customer = await self.get_customer_or_404(customer_id)

        update_data = data.model_dump(exclude_unset=True)
        if "gender" in update_data and update_data["gender"] is not None:
            update_data["gender"] = Gender(update_data["gender"].value)
        for field, value in update_data.items():
            if value is None and field in ("name", "mobile", "gender"):
                continue
            setattr(customer, field, value)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Customer with mobile {data.mobile} already exists")

        await self.db.refresh(customer)
        logger.info(f"Customer {customer.id} updated: {sorted(update_data)}")
        return customer

    async def delete_customer(self, customer_id: int) -> None:
        # Local imports: invoices and gold loans both depend on this module
        from app.modules.invoices.models import Invoice
        from app.modules.gold_loans.models import GoldLoan

        customer = await self.get_customer_or_404(customer_id)

        invoice_count = await self.db.scalar(
            select(func.count(Invoice.id)).where(Invoice.customer_id == customer_id)
        )
        loan_count = await self.db.scalar(
            select(func.count(GoldLoan.id)).where(GoldLoan.customer_id == customer_id)
        )
        if invoice_count or loan_count:
            raise ConflictError(
                "Customer has linked invoices or gold loans and cannot be deleted",
                {"invoices": invoice_count, "gold_loans": loan_count}
            )

        await self.db.delete(customer)
        await self.db.commit()
        logger.info(f"Customer {customer_id} deleted")

    @staticmethod
    def record_invoice(customer: Customer, invoice) -> CustomerHistoryEntry:
        """
        Append a billing history entry and move dues and loyalty points.

        Does not commit; the caller commits together with the invoice.
        """
        entry = CustomerHistoryEntry(
            invoice_id=invoice.id,
            date=invoice.date,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            due_amount=invoice.due_amount
        )
        customer.history.append(entry)
        customer.total_due = (customer.total_due or 0.0) + invoice.due_amount
        customer.loyalty_points = (customer.loyalty_points or 0) + loyalty_points_for(invoice.paid_amount)
        return entry
