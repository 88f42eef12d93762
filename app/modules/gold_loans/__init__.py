# Gold loans module
from app.modules.gold_loans.models import (
    GoldLoan, PledgedItem, LoanRepayment, GoldLoanStatus, PledgedItemType
)
from app.modules.gold_loans.services import GoldLoanService
from app.modules.gold_loans.router import router

__all__ = [
    "GoldLoan", "PledgedItem", "LoanRepayment", "GoldLoanStatus", "PledgedItemType",
    "GoldLoanService", "router"
]
