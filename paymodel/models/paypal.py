"""PayPal payment."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from paymodel.config import PayPalConfig
from paymodel.exceptions import InvalidPaymentDetailsError
from paymodel.models.enums import NotificationType, PayPalFundingSource, PaymentStatus
from paymodel.models.events import EventSink
from paymodel.models.payment import Payment, money, to_decimal


class PayPalPayment(Payment):
    """Payment authorized by the payer through a simulated PayPal redirect."""

    def __init__(
        self,
        amount: Any,
        paypal_email: str,
        funding_source: PayPalFundingSource = PayPalFundingSource.BALANCE,
        config: PayPalConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        super().__init__(amount, sink=sink)
        if paypal_email is None:
            raise InvalidPaymentDetailsError("paypal_email is required")

        self.config = config or PayPalConfig()
        self.paypal_email = paypal_email
        self.funding_source = funding_source
        self.authorization_token: str | None = None
        self.is_authorized = False

    @property
    def payment_method(self) -> str:
        return "PayPal"

    @property
    def transaction_fee_percentage(self) -> Decimal:
        return self.config.fee_percentage

    @property
    def fixed_fee(self) -> Decimal:
        return self.config.fixed_fee

    @property
    def transaction_fee(self) -> Decimal:
        return self.amount * self.transaction_fee_percentage / 100 + self.fixed_fee

    def process(self) -> bool:
        if not self._begin_processing():
            return False

        self._emit("redirected", f"Redirecting {self.paypal_email} to PayPal for authorization...")

        if not self._request_authorization():
            self._mark_as_failed("User cancelled PayPal authorization")
            return False

        self._emit(
            "captured",
            f"Captured {money(self.amount)} from {self.funding_source.value}, "
            f"PayPal fee {money(self.transaction_fee)} "
            f"({self.transaction_fee_percentage}% + {money(self.fixed_fee)}), "
            f"merchant receives {money(self.amount - self.transaction_fee)}",
            amount=self.amount,
            fee=self.transaction_fee,
        )
        self._mark_as_completed()
        return True

    def validate(self) -> bool:
        if not self.paypal_email or not self.paypal_email.strip() or "@" not in self.paypal_email:
            self._emit("validation_failed", "Invalid PayPal email", NotificationType.ERROR)
            return False

        if self.amount > self.config.transaction_limit:
            self._emit(
                "validation_failed",
                f"Amount exceeds PayPal transaction limit ({money(self.config.transaction_limit)})",
                NotificationType.ERROR,
            )
            return False

        self._emit("validated", "PayPal validation passed")
        return True

    def describe(self) -> str:
        return (
            "PayPal Details\n"
            "==============\n"
            f"PayPal Email: {self.paypal_email}\n"
            f"Funding Source: {self.funding_source.value}\n"
            f"Authorization: {'Approved' if self.is_authorized else 'Pending'}\n"
            f"Auth Token: {self.authorization_token or 'N/A'}\n"
            f"Fixed Fee: {money(self.fixed_fee)}"
        )

    def refund(self, refund_amount: Any) -> bool:
        self._emit("refund_requested", f"Processing PayPal refund to {self.paypal_email}...")
        if not super().refund(refund_amount):
            return False

        self._emit("refund_sent",
                   f"Refund sent to {self.paypal_email}, available immediately in PayPal balance")
        return True

    def cancel(self) -> bool:
        self._emit("cancel_requested", "Cancelling PayPal payment...")
        if not super().cancel():
            return False

        if self.is_authorized:
            self.is_authorized = False
            self.authorization_token = None
            self._emit("authorization_voided", "Voided PayPal authorization")
        return True

    def send_receipt(self, destination: str | None = None) -> str | None:
        """Send the receipt through PayPal to the account email.

        ``destination`` is ignored; PayPal always notifies the account holder.
        """
        if self.status != PaymentStatus.COMPLETED:
            self._emit("receipt_skipped", "Cannot send receipt - payment not completed.",
                       NotificationType.WARNING)
            return None

        receipt = "\n".join(
            [
                f"To: {self.paypal_email}",
                f"Amount: {money(self.amount)}",
                f"Transaction ID: {self.transaction_id}",
            ]
        )
        self._emit("receipt_sent", f"PayPal receipt sent to {self.paypal_email}",
                   NotificationType.SUCCESS, destination=self.paypal_email)
        return receipt

    def send_money_to_friend(self, recipient_email: str, amount: Any) -> bool:
        """Friends and family transfer, allowed once this payment completed."""
        if self.status != PaymentStatus.COMPLETED:
            self._emit("transfer_rejected", "Complete the payment first before sending money.",
                       NotificationType.WARNING)
            return False

        amount = to_decimal(amount)
        self._emit(
            "transfer_sent",
            f"Sent {money(amount)} to {recipient_email} via PayPal (friends and family, no fees)",
            NotificationType.SUCCESS,
            recipient=recipient_email,
            amount=amount,
        )
        return True

    def create_subscription(self, interval: str) -> str:
        description = f"{money(self.amount)} every {interval} from {self.paypal_email}"
        self._emit("subscription_created", f"PayPal subscription created: {description}",
                   NotificationType.SUCCESS, interval=interval)
        return description

    def _request_authorization(self) -> bool:
        self._emit("authorization_requested",
                   f"User reviewing {money(self.amount)} payment funded by "
                   f"{self.funding_source.value}")
        # Simulated user approval
        self.is_authorized = True
        self.authorization_token = f"PP-{uuid.uuid4().hex[:12].upper()}"
        self._emit("authorized", f"User authorized payment, token {self.authorization_token}",
                   NotificationType.SUCCESS)
        return True

    def __str__(self) -> str:
        return f"PayPal ({self.paypal_email}): {money(self.amount)} - {self.status.value}"
