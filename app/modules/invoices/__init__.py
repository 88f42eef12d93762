# Invoices module
from app.modules.invoices.models import Invoice, InvoiceItem, InvoiceStatus
from app.modules.invoices.services import InvoiceService
from app.modules.invoices.router import router

__all__ = ["Invoice", "InvoiceItem", "InvoiceStatus", "InvoiceService", "router"]
