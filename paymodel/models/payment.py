"""Abstract payment base class.

Every concrete payment shares the same lifecycle::

    PENDING -> PROCESSING -> COMPLETED | FAILED
    COMPLETED -> REFUNDED
    PENDING | PROCESSING | FAILED -> CANCELLED

``CANCELLED`` and ``REFUNDED`` are final. Business outcomes (validation
failures, refused refunds or cancellations) are reported as ``False``
return values; only bad constructor arguments raise.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any

from paymodel.exceptions import InvalidAmountError
from paymodel.logging import get_logger
from paymodel.models.enums import NotificationType, PaymentStatus
from paymodel.models.events import EventSink, PaymentEvent

logger = get_logger(__name__)

FINAL_STATUSES = frozenset({PaymentStatus.CANCELLED, PaymentStatus.REFUNDED})


def to_decimal(value: Any) -> Decimal:
    """Convert ints, floats and strings to ``Decimal`` without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money(value: Decimal) -> str:
    """Format an amount as ``$1,234.56``."""
    return f"${value:,.2f}"


class Payment(ABC):
    """Base class for all payment methods.

    Parameters
    ----------
    amount : Decimal | int | float | str
        Amount to charge. Must be positive.
    sink : EventSink | None
        Optional receiver for every event the payment emits. Events are
        always logged through this module's logger as well.

    Raises
    ------
    InvalidAmountError
        If ``amount`` is zero or negative.
    """

    def __init__(self, amount: Any, sink: EventSink | None = None) -> None:
        amount = to_decimal(amount)
        if amount <= 0:
            raise InvalidAmountError(f"Payment amount must be positive, got {amount}")

        self._amount = amount
        self._status = PaymentStatus.PENDING
        self._transaction_id = self._generate_transaction_id()
        self._payment_date = datetime.now()
        self.sink = sink

    # ------------------------------------------------------------------
    # Identity and derived values
    # ------------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    @property
    def payment_date(self) -> datetime:
        return self._payment_date

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def payment_method(self) -> str:
        """Display name of the payment method."""
        return "Generic Payment"

    @property
    def transaction_fee_percentage(self) -> Decimal:
        """Fee rate in percent."""
        return Decimal("0")

    @property
    def transaction_fee(self) -> Decimal:
        return self.amount * self.transaction_fee_percentage / 100

    @property
    def total_amount(self) -> Decimal:
        return self.amount + self.transaction_fee

    # ------------------------------------------------------------------
    # Contract implemented by every variant
    # ------------------------------------------------------------------

    @abstractmethod
    def process(self) -> bool:
        """Run the payment through its method-specific processing steps.

        Implementations call :meth:`_begin_processing` first, which validates
        and moves the payment to ``PROCESSING``.
        """

    @abstractmethod
    def validate(self) -> bool:
        """Check payment details. Never changes ``status``."""

    @abstractmethod
    def describe(self) -> str:
        """Return the method-specific detail block."""

    # ------------------------------------------------------------------
    # Overridable lifecycle operations
    # ------------------------------------------------------------------

    def refund(self, refund_amount: Any) -> bool:
        """Refund a completed payment.

        Variants extend this by calling ``super().refund()`` first and
        returning early on ``False``.
        """
        if self._status != PaymentStatus.COMPLETED:
            self._emit("refund_rejected", "Cannot refund - payment not completed.",
                       NotificationType.WARNING)
            return False

        refund_amount = to_decimal(refund_amount)
        if refund_amount <= 0 or refund_amount > self.amount:
            self._emit(
                "refund_rejected",
                f"Invalid refund amount. Must be between $0 and {money(self.amount)}",
                NotificationType.WARNING,
                refund_amount=refund_amount,
            )
            return False

        self._status = PaymentStatus.REFUNDED
        self._emit(
            "refunded",
            f"Refund processed: {money(refund_amount)} via {self.payment_method}",
            NotificationType.SUCCESS,
            refund_amount=refund_amount,
        )
        return True

    def cancel(self) -> bool:
        """Cancel a payment that has not completed."""
        if self._status == PaymentStatus.COMPLETED:
            self._emit("cancel_rejected",
                       "Cannot cancel - payment already completed. Use refund instead.",
                       NotificationType.WARNING)
            return False

        if self._status in FINAL_STATUSES:
            self._emit("cancel_rejected", f"Payment already {self._status.value.lower()}.",
                       NotificationType.WARNING)
            return False

        self._status = PaymentStatus.CANCELLED
        self._emit("cancelled", f"Payment cancelled: {self.transaction_id}")
        return True

    def send_receipt(self, destination: str) -> str | None:
        """Send a receipt for a completed payment.

        Returns
        -------
        str | None
            The receipt text, or None when the payment is not completed.
        """
        if self._status != PaymentStatus.COMPLETED:
            self._emit("receipt_skipped", "Cannot send receipt - payment not completed.",
                       NotificationType.WARNING)
            return None

        receipt = "\n".join(
            [
                f"Receipt for: {destination}",
                f"Transaction ID: {self.transaction_id}",
                f"Amount: {money(self.amount)}",
                f"Method: {self.payment_method}",
                f"Date: {self.payment_date:%Y-%m-%d %H:%M}",
            ]
        )
        self._emit("receipt_sent", f"Receipt sent to: {destination}",
                   NotificationType.SUCCESS, destination=destination)
        return receipt

    # ------------------------------------------------------------------
    # Template methods
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Full payment summary including the variant detail block."""
        return (
            "Payment Summary\n"
            "===============\n"
            f"Transaction ID: {self.transaction_id}\n"
            f"Method: {self.payment_method}\n"
            f"Status: {self.status.value}\n"
            f"Date: {self.payment_date:%Y-%m-%d %H:%M:%S}\n"
            f"Amount: {money(self.amount)}\n"
            f"Transaction Fee: {money(self.transaction_fee)} "
            f"({self.transaction_fee_percentage}%)\n"
            f"Total: {money(self.total_amount)}\n"
            "\n"
            f"{self.describe()}"
        )

    def is_completed(self) -> bool:
        return self._status == PaymentStatus.COMPLETED

    def can_refund(self) -> bool:
        return self._status == PaymentStatus.COMPLETED

    # ------------------------------------------------------------------
    # Helpers for variants
    # ------------------------------------------------------------------

    def _begin_processing(self) -> bool:
        """Validate and move to ``PROCESSING``.

        Returns False, marking the payment failed when validation does not
        pass. A payment that already left ``PENDING`` is not processed again.
        """
        if self._status != PaymentStatus.PENDING:
            self._emit(
                "processing_rejected",
                f"Cannot process - payment is {self._status.value.lower()}.",
                NotificationType.WARNING,
            )
            return False

        self._emit("processing_started",
                   f"Starting {self.payment_method} payment processing...")

        if not self.validate():
            self._mark_as_failed("Validation failed")
            return False

        self._status = PaymentStatus.PROCESSING
        return True

    def _mark_as_completed(self) -> None:
        self._status = PaymentStatus.COMPLETED
        self._emit(
            "completed",
            f"Payment completed: {self.transaction_id}",
            NotificationType.SUCCESS,
            fee=self.transaction_fee,
            total=self.total_amount,
        )

    def _mark_as_failed(self, reason: str) -> None:
        self._status = PaymentStatus.FAILED
        self._emit("failed", f"Payment failed: {reason}", NotificationType.ERROR,
                   reason=reason)

    def _emit(
        self,
        action: str,
        message: str,
        level: NotificationType = NotificationType.INFO,
        **data: Any,
    ) -> PaymentEvent:
        """Log an event and forward it to the sink, if any."""
        event = PaymentEvent(
            event_type=f"payment.{action}",
            source=self.payment_method,
            subject=self.transaction_id,
            message=message,
            level=level,
            data=data,
        )
        logger.log(
            event.log_level,
            "[%s] %s",
            self.transaction_id,
            message,
            extra={"extra": {"event_type": event.event_type, "transaction_id": self.transaction_id}},
        )
        if self.sink is not None:
            self.sink.on_event(event)
        return event

    @staticmethod
    def _generate_transaction_id() -> str:
        suffix = uuid.uuid4().hex[:6].upper()
        return f"TXN-{datetime.now():%Y%m%d%H%M%S}-{suffix}"

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> Decimal:
        if isinstance(other, Payment):
            return self.amount + other.amount
        if isinstance(other, (Decimal, int)):
            return self.amount + other
        return NotImplemented

    def __radd__(self, other: Any) -> Decimal:
        # Also covers sum(payments), which starts from 0
        if isinstance(other, (Decimal, int)):
            return other + self.amount
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Payment):
            return NotImplemented
        return self.amount < other.amount

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Payment):
            return NotImplemented
        return self.amount > other.amount

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Payment):
            return NotImplemented
        return self.transaction_id == other.transaction_id

    def __hash__(self) -> int:
        return hash(self.transaction_id)

    def __str__(self) -> str:
        return f"{self.payment_method}: {money(self.amount)} - {self.status.value}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(transaction_id={self.transaction_id!r}, "
            f"amount={self.amount!r}, status={self.status.value})"
        )
