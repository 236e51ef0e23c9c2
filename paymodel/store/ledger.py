"""In-memory ledger of payments."""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal

from paymodel.exceptions import DuplicatePaymentError, PaymentNotFoundError
from paymodel.models import Payment, PaymentStatus


@dataclass
class PaymentLedger:
    """Index of payments by transaction id."""

    payments: dict[str, Payment] = field(default_factory=dict)

    def add(self, payment: Payment) -> None:
        """Record a payment."""
        if payment.transaction_id in self.payments:
            raise DuplicatePaymentError(f"Payment {payment.transaction_id} already recorded")
        self.payments[payment.transaction_id] = payment

    def get(self, transaction_id: str) -> Payment:
        """Look up a payment by transaction id."""
        try:
            return self.payments[transaction_id]
        except KeyError:
            raise PaymentNotFoundError(f"Payment {transaction_id} not found") from None

    def __len__(self) -> int:
        return len(self.payments)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self.payments

    def __iter__(self):
        return iter(self.payments.values())

    def by_status(self, status: PaymentStatus) -> list[Payment]:
        return [p for p in self.payments.values() if p.status == status]

    def by_method(self, payment_type: type[Payment]) -> list[Payment]:
        return [p for p in self.payments.values() if isinstance(p, payment_type)]

    def refundable(self) -> list[Payment]:
        return [p for p in self.payments.values() if p.can_refund()]

    def status_counts(self) -> dict[PaymentStatus, int]:
        return dict(Counter(p.status for p in self.payments.values()))

    def total_amount(self, status: PaymentStatus | None = None) -> Decimal:
        """Sum of payment amounts, optionally for one status only."""
        payments = self.payments.values() if status is None else self.by_status(status)
        return sum(payments, Decimal("0"))

    def total_fees(self, status: PaymentStatus | None = None) -> Decimal:
        payments = self.payments.values() if status is None else self.by_status(status)
        return sum((p.transaction_fee for p in payments), Decimal("0"))
