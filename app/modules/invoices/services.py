from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple, Dict, Any, Sequence
from datetime import datetime, timezone
import logging

from app.core.config import settings
from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.core.sequencing import next_sequence_number
from app.modules.customers.services import CustomerService
from app.modules.invoices.models import Invoice, InvoiceItem, InvoiceStatus
from app.modules.invoices.schemas import InvoiceCreate, InvoiceItemCreate

logger = logging.getLogger(__name__)


def calculate_invoice_totals(
    items: Sequence[InvoiceItemCreate], gst: float
) -> Tuple[List[Dict[str, Any]], float, float, float]:
    """
    Price each line and total the invoice.

    Returns (priced lines, subtotal, gst_amount, total).
    """
    priced_items = []
    for item in items:
        making_charge = item.making_charge or 0.0
        priced_items.append({
            "name": item.name,
            "weight": item.weight,
            "rate": item.rate,
            "making_charge": making_charge,
            "total_price": item.weight * item.rate + making_charge,
        })

    subtotal = sum(line["total_price"] for line in priced_items)
    gst_amount = subtotal * (gst / 100)
    return priced_items, subtotal, gst_amount, subtotal + gst_amount


def invoice_payment_status(total_amount: float, paid_amount: float) -> Tuple[InvoiceStatus, float]:
    """Returns (status, due amount)"""
    if paid_amount >= total_amount:
        return InvoiceStatus.PAID, 0.0
    if paid_amount > 0:
        return InvoiceStatus.PARTIAL, total_amount - paid_amount
    return InvoiceStatus.PENDING, total_amount


class InvoiceService:
    """Service layer for sales invoices"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_invoice(self, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice and post it to the customer's history.

        The invoice and the customer update are committed together.
        """
        customers = CustomerService(self.db)
        customer = await customers.get_customer_or_404(data.customer_id)

        gst = data.gst if data.gst is not None else settings.DEFAULT_GST_RATE
        priced_items, subtotal, gst_amount, calculated_total = calculate_invoice_totals(data.items, gst)

        if abs(calculated_total - data.total_amount) > settings.INVOICE_TOTAL_TOLERANCE:
            logger.warning(
                f"Invoice total mismatch for customer {customer.id}: "
                f"calculated {calculated_total}, provided {data.total_amount}"
            )
            raise ValidationError(
                "Total amount mismatch",
                {"calculated": calculated_total, "provided": data.total_amount}
            )

        invoice_status, due_amount = invoice_payment_status(data.total_amount, data.paid_amount)
        invoice_number = await next_sequence_number(self.db, Invoice.invoice_number)

        invoice = Invoice(
            invoice_number=invoice_number,
            date=data.date or datetime.now(timezone.utc),
            customer=customer,
            items=[InvoiceItem(**line) for line in priced_items],
            subtotal=subtotal,
            gst=gst,
            gst_amount=gst_amount,
            total_amount=data.total_amount,
            paid_amount=data.paid_amount,
            due_amount=due_amount,
            status=invoice_status
        )
        self.db.add(invoice)

        try:
            await self.db.flush()
            CustomerService.record_invoice(customer, invoice)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Invoice number {invoice_number} was taken concurrently, retry the request")

        await self.db.refresh(invoice)
        logger.info(
            f"Invoice {invoice.invoice_number} created for customer {customer.id}: "
            f"total {invoice.total_amount}, due {invoice.due_amount}"
        )
        return invoice

    async def get_invoice(self, invoice_id: int) -> Invoice:
        result = await self.db.execute(select(Invoice).where(Invoice.id == invoice_id))
        invoice = result.scalar_one_or_none()
        if not invoice:
            raise NotFoundError("Invoice not found")
        return invoice

    async def get_invoices(
        self,
        customer_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[Invoice]:
        query = select(Invoice)
        if customer_id:
            query = query.where(Invoice.customer_id == customer_id)
        if status:
            query = query.where(Invoice.status == InvoiceStatus(status))
        query = query.order_by(Invoice.date.desc(), Invoice.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())
