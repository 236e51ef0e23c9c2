"""Credit card payment."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from paymodel.config import CreditCardConfig
from paymodel.exceptions import InvalidPaymentDetailsError
from paymodel.models.enums import CardBrand, NotificationType, PaymentStatus
from paymodel.models.events import EventSink
from paymodel.models.payment import Payment, money


class CreditCardPayment(Payment):
    """Payment charged to a credit card through a simulated gateway.

    The card number check only looks at digits and length; there is no
    Luhn checksum.
    """

    def __init__(
        self,
        amount: Any,
        card_number: str,
        cardholder_name: str,
        expiration_date: date,
        cvv: str,
        card_brand: CardBrand = CardBrand.VISA,
        config: CreditCardConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        super().__init__(amount, sink=sink)
        if card_number is None:
            raise InvalidPaymentDetailsError("card_number is required")
        if cardholder_name is None:
            raise InvalidPaymentDetailsError("cardholder_name is required")

        self.config = config or CreditCardConfig()
        self.card_number = card_number
        self.cardholder_name = cardholder_name
        if isinstance(expiration_date, datetime):
            expiration_date = expiration_date.date()
        self.expiration_date = expiration_date
        self._cvv = cvv
        self.card_brand = card_brand
        self.is_disputed = False
        self.chargeback_reason: str | None = None

    @property
    def payment_method(self) -> str:
        return f"{self.card_brand.display_name} Credit Card"

    @property
    def transaction_fee_percentage(self) -> Decimal:
        return self.config.fee_percentage

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]

    @property
    def masked_card_number(self) -> str:
        return f"****-****-****-{self.last_four}"

    def process(self) -> bool:
        if not self._begin_processing():
            return False

        self._emit("gateway_contacted",
                   f"Contacting payment gateway for {self.card_brand.display_name}...")
        self._emit("authorizing", f"Authorizing card ending in {self.last_four}...")

        if not self._authorize():
            self._mark_as_failed("Card authorization declined")
            return False

        self._emit(
            "captured",
            f"Captured {money(self.amount)}, fee {money(self.transaction_fee)} "
            f"({self.transaction_fee_percentage}%), total charged {money(self.total_amount)}",
            amount=self.amount,
            fee=self.transaction_fee,
        )
        self._mark_as_completed()
        return True

    def validate(self) -> bool:
        if not self._is_valid_card_number():
            self._emit("validation_failed", "Invalid card number", NotificationType.ERROR)
            return False

        if self.expiration_date < date.today():
            self._emit("validation_failed", "Card expired", NotificationType.ERROR)
            return False

        if not self._cvv or not self._cvv.strip() or len(self._cvv) != self.config.cvv_length:
            self._emit("validation_failed", "Invalid CVV", NotificationType.ERROR)
            return False

        if not self.cardholder_name or not self.cardholder_name.strip():
            self._emit("validation_failed", "Invalid cardholder name", NotificationType.ERROR)
            return False

        self._emit("validated", "Credit card validation passed")
        return True

    def describe(self) -> str:
        authorization = "Approved" if self.status == PaymentStatus.COMPLETED else "Pending"
        return (
            "Credit Card Details\n"
            "===================\n"
            f"Card Type: {self.card_brand.display_name}\n"
            f"Card Number: {self.masked_card_number}\n"
            f"Cardholder: {self.cardholder_name}\n"
            f"Expiration: {self.expiration_date:%m/%y}\n"
            f"Authorization: {authorization}"
        )

    def refund(self, refund_amount: Any) -> bool:
        self._emit("refund_requested",
                   f"Processing credit card refund to {self.masked_card_number}...")
        if not super().refund(refund_amount):
            return False

        self._emit("refund_posted",
                   "Refund posted to card - will appear in 3-5 business days")
        return True

    def cancel(self) -> bool:
        self._emit("cancel_requested", "Cancelling credit card payment...")
        if not super().cancel():
            return False

        self._emit("hold_released",
                   "Releasing authorization hold on card, released within 24 hours")
        return True

    def initiate_chargeback(self, reason: str) -> bool:
        """Open a dispute with the card issuer for a completed payment."""
        if self.status != PaymentStatus.COMPLETED:
            self._emit("chargeback_rejected",
                       "Cannot initiate chargeback - payment not completed.",
                       NotificationType.WARNING)
            return False

        self.is_disputed = True
        self.chargeback_reason = reason
        self._emit(
            "chargeback_initiated",
            f"Chargeback for {self.masked_card_number} submitted to card issuer: {reason}. "
            "Investigation will take 30-90 days",
            NotificationType.WARNING,
            reason=reason,
        )
        return True

    def _is_valid_card_number(self) -> bool:
        digits = self.card_number.replace(" ", "").replace("-", "")
        if not (digits.isascii() and digits.isdigit()):
            return False
        return self.config.min_card_digits <= len(digits) <= self.config.max_card_digits

    def _authorize(self) -> bool:
        if self.amount > self.config.large_transaction_threshold:
            self._emit("verification_required",
                       "Large transaction - additional verification required",
                       NotificationType.WARNING)
        # Simulated gateway, always approves
        return True

    def __str__(self) -> str:
        return (
            f"{self.card_brand.display_name} {self.masked_card_number}: "
            f"{money(self.amount)} - {self.status.value}"
        )
