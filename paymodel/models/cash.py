"""Cash payment."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from paymodel.config import CashConfig
from paymodel.exceptions import InsufficientTenderError
from paymodel.models.enums import NotificationType, PaymentStatus
from paymodel.models.events import EventSink
from paymodel.models.payment import Payment, money, to_decimal


class CashPayment(Payment):
    """Payment made in cash at a register.

    Raises
    ------
    InsufficientTenderError
        If ``amount_tendered`` is less than ``amount``.
    """

    def __init__(
        self,
        amount: Any,
        amount_tendered: Any,
        currency: str | None = None,
        cashier_name: str | None = None,
        register_number: int | None = None,
        config: CashConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        super().__init__(amount, sink=sink)
        amount_tendered = to_decimal(amount_tendered)
        if amount_tendered < self.amount:
            raise InsufficientTenderError(
                f"Amount tendered {amount_tendered} must cover payment amount {self.amount}"
            )

        self.config = config or CashConfig()
        self.amount_tendered = amount_tendered
        self.currency = currency or self.config.currency
        self.cashier_name = cashier_name
        self.register_number = register_number
        self.is_cash_verified = False
        self.refunded_amount = Decimal("0")

    @property
    def payment_method(self) -> str:
        return "Cash"

    @property
    def transaction_fee_percentage(self) -> Decimal:
        return self.config.fee_percentage

    @property
    def change(self) -> Decimal:
        if self.amount_tendered > self.amount:
            return self.amount_tendered - self.amount
        return Decimal("0")

    def process(self) -> bool:
        if not self._begin_processing():
            return False

        self._emit(
            "cash_received",
            f"Amount due {money(self.amount)} {self.currency}, "
            f"tendered {money(self.amount_tendered)} {self.currency}",
        )

        if not self._verify_cash():
            self._mark_as_failed("Cash verification failed - possible counterfeit")
            return False

        if self.change > 0:
            self._emit(
                "change_given",
                f"Providing change {money(self.change)}: {self.change_breakdown()}",
                change=self.change,
            )
        else:
            self._emit("change_given", "Exact change received - no change needed")

        self.open_cash_drawer()
        if self.register_number is not None:
            self._emit("cash_stored", f"Placing cash in register #{self.register_number}")

        self._mark_as_completed()
        if self.cashier_name:
            self._emit("cashier_recorded", f"Processed by: {self.cashier_name}")
        return True

    def validate(self) -> bool:
        if self.amount_tendered < self.amount:
            self._emit(
                "validation_failed",
                f"Insufficient cash: {money(self.amount_tendered)} < {money(self.amount)}",
                NotificationType.ERROR,
            )
            return False

        if self.amount > self.config.policy_limit:
            self._emit(
                "validation_failed",
                f"Cash amount exceeds policy limit ({money(self.config.policy_limit)}), "
                "large cash transactions require manager approval",
                NotificationType.ERROR,
            )
            return False

        self._emit("validated", "Cash payment validation passed")
        return True

    def describe(self) -> str:
        lines = [
            "Cash Payment Details",
            "====================",
            f"Currency: {self.currency}",
            f"Amount Tendered: {money(self.amount_tendered)}",
            f"Change Returned: {money(self.change)}",
            f"Cash Verified: {'Yes' if self.is_cash_verified else 'No'}",
        ]
        if self.cashier_name:
            lines.append(f"Cashier: {self.cashier_name}")
        if self.register_number is not None:
            lines.append(f"Register: #{self.register_number}")
        return "\n".join(lines)

    def refund(self, refund_amount: Any) -> bool:
        self._emit("refund_requested", "Processing cash refund...")
        if not super().refund(refund_amount):
            return False

        refund_amount = to_decimal(refund_amount)
        self.refunded_amount = refund_amount
        self.open_cash_drawer()
        self._emit(
            "refund_paid",
            f"Cash refund provided immediately: {self.change_breakdown(refund_amount)}",
            NotificationType.SUCCESS,
        )
        return True

    def cancel(self) -> bool:
        self._emit("cancel_requested", "Cancelling cash transaction...")
        if not super().cancel():
            return False

        self._emit("cash_returned", f"Returning {money(self.amount_tendered)} to customer")
        return True

    def send_receipt(self, destination: str | None = None) -> str | None:
        """Print a register receipt. ``destination`` is ignored."""
        if self.status != PaymentStatus.COMPLETED:
            self._emit("receipt_skipped", "Cannot provide receipt - payment not completed.",
                       NotificationType.WARNING)
            return None

        rule = "=" * 32
        lines = [
            rule,
            "CASH RECEIPT".center(32),
            rule,
            f"Date: {self.payment_date:%Y-%m-%d %H:%M}",
            f"Transaction: {self.transaction_id}",
            f"Amount: {money(self.amount)} {self.currency}",
            f"Tendered: {money(self.amount_tendered)}",
            f"Change: {money(self.change)}",
        ]
        if self.cashier_name:
            lines.append(f"Cashier: {self.cashier_name}")
        lines += [rule, "Thank you for your business!".center(32), rule]

        receipt = "\n".join(lines)
        self._emit("receipt_printed", "Cash receipt printed", NotificationType.SUCCESS)
        return receipt

    def change_breakdown(self, amount: Any = None) -> str:
        """Split an amount (the change by default) into bills and coins.

        >>> CashPayment(63, 100).change_breakdown()
        '1 x $20, 1 x $10, 1 x $5, 2 x $1'
        """
        remaining = self.change if amount is None else to_decimal(amount)
        if remaining == 0:
            return "No change"

        parts = []
        for bill in self.config.denominations:
            count = int(remaining // bill)
            if count > 0:
                parts.append(f"{count} x ${bill}")
                remaining -= count * bill

        if remaining > 0:
            parts.append(f"{money(remaining)} in coins")
        return ", ".join(parts)

    def deposit_slip(self) -> dict[str, Any]:
        """Bank deposit slip for this payment."""
        slip = {
            "date": date.today(),
            "transaction_id": self.transaction_id,
            "amount": self.amount,
            "currency": self.currency,
        }
        self._emit("deposit_slip_created", f"Deposit slip created for {money(self.amount)}")
        return slip

    def open_cash_drawer(self) -> None:
        if self.register_number is None:
            self._emit("drawer_opened", "Opening cash drawer")
        else:
            self._emit("drawer_opened", f"Opening cash drawer on register #{self.register_number}")

    def count_register(self, opening_float: Any = 0) -> Decimal:
        """Count the drawer at the end of a shift.

        Parameters
        ----------
        opening_float : Decimal | int | float | str
            Cash in the drawer before this payment.

        Returns
        -------
        Decimal
            The opening float plus the cash this payment left in the drawer.
        """
        total = to_decimal(opening_float)
        if self.status in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED):
            total += self.amount - self.refunded_amount
        self._emit("register_counted", f"Total in register: {money(total)}", total=total)
        return total

    def _verify_cash(self) -> bool:
        if self.amount >= self.config.pen_check_threshold:
            self._emit("counterfeit_check", "Using counterfeit detection pen...")
        if self.amount >= self.config.watermark_check_threshold:
            self._emit("counterfeit_check", "Checking watermarks and security features...")
        # Simulated check, always genuine
        self.is_cash_verified = True
        self._emit("cash_verified", "Cash verified as genuine")
        return True

    def __str__(self) -> str:
        return (
            f"Cash: {money(self.amount)} {self.currency} "
            f"(Tendered: {money(self.amount_tendered)}, Change: {money(self.change)}) "
            f"- {self.status.value}"
        )
