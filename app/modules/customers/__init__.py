# Customers module
from app.modules.customers.models import Customer, CustomerHistoryEntry, Gender
from app.modules.customers.services import CustomerService
from app.modules.customers.router import router

__all__ = ["Customer", "CustomerHistoryEntry", "Gender", "CustomerService", "router"]
