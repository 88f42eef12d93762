"""
Tests for gold loan valuation, repayment processing and status changes
"""
import pytest
from datetime import datetime
from types import SimpleNamespace

from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.modules.gold_loans.models import GoldLoan, GoldLoanStatus
from app.modules.gold_loans.schemas import GoldLoanCreate, GoldLoanRepaymentRequest, GoldLoanStatusUpdate
from app.modules.gold_loans.services import (
    GoldLoanService, value_collateral, check_loan_to_value, loan_schedule,
    monthly_interest, split_repayment, apply_repayment
)


def make_loan(loan_amount=100000.0, interest_rate=12.0, status=GoldLoanStatus.ACTIVE, remaining_amount=None):
    return GoldLoan(
        loan_number="GL000001",
        loan_amount=loan_amount,
        interest_rate=interest_rate,
        duration=12,
        status=status,
        remaining_amount=loan_amount if remaining_amount is None else remaining_amount,
        next_payment_due=datetime(2026, 2, 15)
    )


class TestCollateralValuation:
    """Tests for collateral value and the loan-to-value ceiling"""

    @pytest.mark.unit
    def test_value_collateral_sums_market_values(self):
        items = [SimpleNamespace(market_value=60000.0), SimpleNamespace(market_value=40000.0)]
        assert value_collateral(items) == 100000.0

    @pytest.mark.unit
    def test_value_collateral_empty(self):
        assert value_collateral([]) == 0

    @pytest.mark.unit
    def test_loan_at_ceiling_is_allowed(self):
        total = 100000.0
        ceiling = check_loan_to_value(0.8 * total, total)
        assert ceiling == 80000.0

    @pytest.mark.unit
    def test_loan_above_ceiling_is_rejected(self):
        total = 100000.0
        with pytest.raises(ValidationError) as exc_info:
            check_loan_to_value(0.8 * total + 0.01, total)

        assert "80000.0" in exc_info.value.message
        assert exc_info.value.payload["max_loan_amount"] == 80000.0

    @pytest.mark.unit
    def test_custom_ratio(self):
        assert check_loan_to_value(60000.0, 100000.0, ratio=0.6) == 60000.0
        with pytest.raises(ValidationError):
            check_loan_to_value(60000.01, 100000.0, ratio=0.6)


class TestRepaymentSplit:
    """Tests for the interest/principal split"""

    @pytest.mark.unit
    def test_monthly_interest_uses_original_principal(self):
        assert monthly_interest(100000.0, 12.0) == 1000.0

    @pytest.mark.unit
    def test_split_repayment(self):
        interest, principal, remaining = split_repayment(100000.0, 12.0, 100000.0, 2000.0)

        assert interest == 1000.0
        assert principal == 1000.0
        assert remaining == 99000.0

    @pytest.mark.unit
    def test_payment_smaller_than_interest_covers_interest_only(self):
        interest, principal, remaining = split_repayment(100000.0, 12.0, 100000.0, 400.0)

        assert interest == 400.0
        assert principal == 0.0
        assert remaining == 100000.0

    @pytest.mark.unit
    def test_interest_does_not_shrink_with_balance(self):
        interest, principal, remaining = split_repayment(100000.0, 12.0, 10000.0, 2000.0)

        assert interest == 1000.0
        assert remaining == 9000.0

    @pytest.mark.unit
    def test_loan_schedule_clamps_month_end(self):
        end_date, first_due = loan_schedule(datetime(2026, 1, 31), 12)

        assert end_date == datetime(2027, 1, 31)
        assert first_due == datetime(2026, 2, 28)


class TestApplyRepayment:
    """Tests for applying repayments to a loan record"""

    @pytest.mark.unit
    def test_apply_repayment_records_history(self):
        loan = make_loan()

        repayment = apply_repayment(loan, 2000.0, datetime(2026, 2, 10))

        assert len(loan.repayments) == 1
        assert repayment.interest_paid == 1000.0
        assert repayment.principal_paid == 1000.0
        assert repayment.remaining_balance == 99000.0
        assert loan.remaining_amount == 99000.0
        assert loan.status == GoldLoanStatus.ACTIVE
        assert loan.next_payment_due == datetime(2026, 3, 10)

    @pytest.mark.unit
    def test_repayments_close_loan_exactly_once(self):
        loan = make_loan(loan_amount=10000.0, interest_rate=12.0)
        # 100 interest per payment, 5000 principal each

        apply_repayment(loan, 5100.0, datetime(2026, 2, 15))
        assert loan.status == GoldLoanStatus.ACTIVE
        assert loan.remaining_amount == 5000.0

        apply_repayment(loan, 5100.0, datetime(2026, 3, 15))
        assert loan.status == GoldLoanStatus.CLOSED
        assert loan.remaining_amount == 0.0

        with pytest.raises(ConflictError, match="Cannot add repayment to closed loan"):
            apply_repayment(loan, 5100.0, datetime(2026, 4, 15))
        assert len(loan.repayments) == 2

    @pytest.mark.unit
    def test_overpayment_closes_with_negative_balance(self):
        loan = make_loan(loan_amount=1200.0, interest_rate=12.0)

        apply_repayment(loan, 2000.0, datetime(2026, 2, 15))

        assert loan.remaining_amount == -788.0
        assert loan.status == GoldLoanStatus.CLOSED

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [GoldLoanStatus.CLOSED, GoldLoanStatus.DEFAULTED, GoldLoanStatus.RENEWED])
    def test_non_active_loan_is_left_unmodified(self, status):
        loan = make_loan(status=status, remaining_amount=50000.0)

        with pytest.raises(ConflictError) as exc_info:
            apply_repayment(loan, 2000.0, datetime(2026, 2, 15))

        assert status.value in exc_info.value.message
        assert loan.repayments == []
        assert loan.remaining_amount == 50000.0
        assert loan.status == status
        assert loan.next_payment_due == datetime(2026, 2, 15)


class TestGoldLoanService:
    """Tests for the gold loan service against the database"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan(self, db_session, test_customer, gold_necklace):
        service = GoldLoanService(db_session)

        loan = await service.create_loan(GoldLoanCreate(
            customer_id=test_customer.id,
            loan_amount=100000.0,
            interest_rate=12.0,
            duration=6,
            start_date=datetime(2026, 1, 15),
            items=[gold_necklace]
        ))

        assert loan.loan_number == "GL000001"
        assert loan.status == GoldLoanStatus.ACTIVE
        assert loan.remaining_amount == 100000.0
        assert loan.total_items_value == 125000.0
        assert loan.end_date == datetime(2026, 7, 15)
        assert loan.next_payment_due == datetime(2026, 2, 15)
        assert len(loan.items) == 1
        assert loan.repayments == []

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_loan_numbers_are_sequential(self, db_session, test_customer, gold_necklace):
        service = GoldLoanService(db_session)

        numbers = []
        for _ in range(3):
            loan = await service.create_loan(GoldLoanCreate(
                customer_id=test_customer.id,
                loan_amount=50000.0,
                interest_rate=10.0,
                duration=12,
                items=[gold_necklace]
            ))
            numbers.append(loan.loan_number)

        assert numbers == ["GL000001", "GL000002", "GL000003"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_unknown_customer(self, db_session, gold_necklace):
        service = GoldLoanService(db_session)

        with pytest.raises(NotFoundError, match="Customer not found"):
            await service.create_loan(GoldLoanCreate(
                customer_id=999,
                loan_amount=1000.0,
                interest_rate=12.0,
                duration=6,
                items=[gold_necklace]
            ))

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_over_ceiling(self, db_session, test_customer, gold_necklace):
        service = GoldLoanService(db_session)

        with pytest.raises(ValidationError, match="maximum allowed value"):
            await service.create_loan(GoldLoanCreate(
                customer_id=test_customer.id,
                loan_amount=100000.01,
                interest_rate=12.0,
                duration=6,
                items=[gold_necklace]
            ))

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_add_repayment(self, db_session, test_loan):
        service = GoldLoanService(db_session)

        loan = await service.add_repayment(
            test_loan.id, GoldLoanRepaymentRequest(amount=2000.0, date=datetime(2026, 2, 15))
        )

        assert loan.remaining_amount == 99000.0
        assert len(loan.repayments) == 1
        assert loan.repayments[0].interest_paid == 1000.0
        assert loan.next_payment_due == datetime(2026, 3, 15)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_add_repayment_missing_loan(self, db_session):
        service = GoldLoanService(db_session)

        with pytest.raises(NotFoundError, match="Loan not found"):
            await service.add_repayment(999, GoldLoanRepaymentRequest(amount=100.0))

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_update_status_rejects_unknown_status(self, db_session, test_loan):
        service = GoldLoanService(db_session)

        with pytest.raises(ValidationError, match="Invalid status"):
            await service.update_status(test_loan.id, GoldLoanStatusUpdate(status="frozen"))

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_defaulted_loan_rejects_repayment(self, db_session, test_loan):
        service = GoldLoanService(db_session)

        loan = await service.update_status(
            test_loan.id, GoldLoanStatusUpdate(status="defaulted", reason="No payment for 3 months")
        )
        assert loan.status == GoldLoanStatus.DEFAULTED
        assert loan.status_reason == "No payment for 3 months"

        with pytest.raises(ConflictError, match="Cannot add repayment to defaulted loan"):
            await service.add_repayment(test_loan.id, GoldLoanRepaymentRequest(amount=2000.0))

        loan = await service.get_loan(test_loan.id)
        assert loan.remaining_amount == 100000.0
        assert loan.repayments == []

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_status_change_is_not_guarded(self, db_session, test_loan):
        service = GoldLoanService(db_session)

        await service.update_status(test_loan.id, GoldLoanStatusUpdate(status="renewed"))
        loan = await service.update_status(test_loan.id, GoldLoanStatusUpdate(status="active"))

        assert loan.status == GoldLoanStatus.ACTIVE


class TestGoldLoanAPI:
    """API tests for gold loan endpoints"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_endpoint(self, client, test_customer, gold_necklace):
        response = await client.post("/api/gold-loans/", json={
            "customer_id": test_customer.id,
            "loan_amount": 100000.0,
            "interest_rate": 12.0,
            "duration": 12,
            "items": [gold_necklace]
        })

        assert response.status_code == 201
        data = response.json()
        assert data["loan_number"] == "GL000001"
        assert data["status"] == "active"
        assert data["remaining_amount"] == 100000.0
        assert data["total_items_value"] == 125000.0
        assert data["customer"]["mobile"] == "9876543210"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_over_ceiling_endpoint(self, client, test_customer, gold_necklace):
        response = await client.post("/api/gold-loans/", json={
            "customer_id": test_customer.id,
            "loan_amount": 100000.01,
            "interest_rate": 12.0,
            "duration": 12,
            "items": [gold_necklace]
        })

        assert response.status_code == 400
        data = response.json()
        assert data["max_loan_amount"] == 100000.0
        assert "100000.0" in data["detail"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_rejects_bad_terms(self, client, test_customer, gold_necklace):
        response = await client.post("/api/gold-loans/", json={
            "customer_id": test_customer.id,
            "loan_amount": 1000.0,
            "interest_rate": 120.0,
            "duration": 0,
            "items": [gold_necklace]
        })

        assert response.status_code == 400
        fields = {error["loc"][-1] for error in response.json()["errors"]}
        assert {"interest_rate", "duration"} <= fields

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_repayment_endpoint(self, client, test_loan):
        response = await client.post(
            f"/api/gold-loans/{test_loan.id}/repayment",
            json={"amount": 2000.0, "date": "2026-02-15T10:00:00"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["remaining_amount"] == 99000.0
        assert data["repayments"][0]["interest_paid"] == 1000.0
        assert data["repayments"][0]["principal_paid"] == 1000.0
        assert data["next_payment_due"].startswith("2026-03-15")

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_full_repayment_closes_loan(self, client, test_loan):
        response = await client.post(
            f"/api/gold-loans/{test_loan.id}/repayment", json={"amount": 101000.0}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "closed"

        response = await client.post(
            f"/api/gold-loans/{test_loan.id}/repayment", json={"amount": 100.0}
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Cannot add repayment to closed loan"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_repayment_amount_must_be_positive(self, client, test_loan):
        response = await client.post(
            f"/api/gold-loans/{test_loan.id}/repayment", json={"amount": 0}
        )
        assert response.status_code == 400

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_status_endpoint(self, client, test_loan):
        response = await client.put(
            f"/api/gold-loans/{test_loan.id}/status", json={"status": "bogus"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid status"

        response = await client.put(
            f"/api/gold-loans/{test_loan.id}/status", json={"status": "renewed", "reason": "Renewed at 11%"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "renewed"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_list_and_get_loans(self, client, test_loan):
        response = await client.get("/api/gold-loans/", params={"status": "active"})
        assert response.status_code == 200
        assert [loan["loan_number"] for loan in response.json()] == ["GL000001"]

        response = await client.get("/api/gold-loans/", params={"status": "closed"})
        assert response.json() == []

        response = await client.get(f"/api/gold-loans/{test_loan.id}")
        assert response.status_code == 200

        response = await client.get("/api/gold-loans/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Loan not found"


class TestNonFiniteInput:
    """Infinity and NaN are rejected before any loan arithmetic"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_infinite_market_value_is_bad_request(self, client, test_customer):
        body = (
            '{"customer_id": %d, "loan_amount": 1e308, "interest_rate": 12, "duration": 6, '
            '"items": [{"item_type": "Gold", "weight": 20, "purity": 22, "market_value": Infinity}]}'
        ) % test_customer.id

        response = await client.post(
            "/api/gold-loans/", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"

        response = await client.get("/api/gold-loans/")
        assert response.json() == []

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["Infinity", "NaN"])
    async def test_non_finite_repayment_is_bad_request(self, client, test_loan, amount):
        response = await client.post(
            f"/api/gold-loans/{test_loan.id}/repayment",
            content='{"amount": %s}' % amount,
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

        response = await client.get(f"/api/gold-loans/{test_loan.id}")
        assert response.json()["status"] == "active"
        assert response.json()["remaining_amount"] == 100000.0
        assert response.json()["repayments"] == []

    @pytest.mark.unit
    def test_schema_rejects_infinite_market_value(self):
        with pytest.raises(ValueError, match="finite"):
            GoldLoanCreate(
                customer_id=1,
                loan_amount=1000.0,
                interest_rate=12.0,
                duration=6,
                items=[{"item_type": "Gold", "weight": 1.0, "purity": 22, "market_value": float("inf")}]
            )

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_loan_needs_at_least_one_item(self, client, test_customer):
        response = await client.post("/api/gold-loans/", json={
            "customer_id": test_customer.id,
            "loan_amount": 0,
            "interest_rate": 12.0,
            "duration": 6,
            "items": []
        })

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"][-1] == "items"
