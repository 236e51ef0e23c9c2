"""Bitcoin payment with simulated blockchain confirmations."""

from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from paymodel.config import BitcoinConfig
from paymodel.exceptions import InvalidPaymentDetailsError
from paymodel.models.enums import NotificationType, PaymentStatus
from paymodel.models.events import EventSink
from paymodel.models.payment import Payment, money, to_decimal

SATOSHI = Decimal("0.00000001")
CENT = Decimal("0.01")


class BitcoinPayment(Payment):
    """Payment settled by a bitcoin transfer.

    ``process()`` broadcasts the transaction and then watches at most
    ``confirmation_window`` blocks. When fewer confirmations than required
    arrive in that window the payment stays ``PROCESSING`` and ``process()``
    returns False even though the transaction was broadcast;
    :meth:`monitor_confirmations` picks up from there.

    Parameters
    ----------
    amount : Decimal | int | float | str
        Amount in USD.
    wallet_address : str
        Destination wallet.
    exchange_rate : Decimal | int | float | str
        USD per BTC.
    network : str | None
        Network name, defaults to ``config.network``.
    confirmation_window : int | None
        Blocks observed during ``process()``, defaults to the required count.
    """

    def __init__(
        self,
        amount: Any,
        wallet_address: str,
        exchange_rate: Any,
        network: str | None = None,
        confirmation_window: int | None = None,
        config: BitcoinConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        super().__init__(amount, sink=sink)
        if wallet_address is None:
            raise InvalidPaymentDetailsError("wallet_address is required")

        self.config = config or BitcoinConfig()
        self.wallet_address = wallet_address
        self.exchange_rate = to_decimal(exchange_rate)
        self.network = network or self.config.network
        self.required_confirmations = self.config.required_confirmations
        self.confirmation_window = (
            self.required_confirmations if confirmation_window is None else confirmation_window
        )
        # A non-positive rate leaves nothing to convert; validate() rejects it
        self.bitcoin_amount = (
            self.convert_to_bitcoin(self.amount) if self.exchange_rate > 0 else Decimal("0")
        )
        self.confirmations = 0
        self.transaction_hash: str | None = None
        self.refund_transaction_hash: str | None = None

    @property
    def payment_method(self) -> str:
        return f"Bitcoin ({self.network})"

    @property
    def transaction_fee_percentage(self) -> Decimal:
        return self.config.fee_percentage

    @property
    def network_fee_btc(self) -> Decimal:
        return self.config.network_fee_btc

    @property
    def is_confirmed(self) -> bool:
        return self.confirmations >= self.required_confirmations

    @property
    def masked_wallet_address(self) -> str:
        return f"{self.wallet_address[:6]}...{self.wallet_address[-4:]}"

    def process(self) -> bool:
        if not self._begin_processing():
            return False

        self._emit(
            "bitcoin_transfer",
            f"Sending {self.bitcoin_amount:.8f} BTC ({money(self.amount)} USD) to "
            f"{self.masked_wallet_address} on {self.network}, "
            f"network fee {self.network_fee_btc:.8f} BTC",
            btc_amount=self.bitcoin_amount,
        )

        if not self._broadcast():
            self._mark_as_failed("Failed to broadcast transaction to blockchain")
            return False

        return self.monitor_confirmations(self.confirmation_window)

    def monitor_confirmations(self, blocks: int = 1) -> bool:
        """Watch ``blocks`` more blocks for confirmations of a broadcast payment.

        Returns True once the payment reached the required confirmations and
        completed.
        """
        if self.status != PaymentStatus.PROCESSING or self.transaction_hash is None:
            self._emit("monitoring_skipped", "No broadcast transaction awaiting confirmations",
                       NotificationType.WARNING)
            return False

        for _ in range(blocks):
            if self.is_confirmed:
                break
            self.confirmations += 1
            self._emit(
                "block_confirmed",
                f"Block #{self.confirmations} confirmed "
                f"({self.confirmations}/{self.required_confirmations})",
                confirmations=self.confirmations,
            )
            if self.confirmations == 1:
                self._emit("first_confirmation",
                           "First confirmation - payment considered valid but not finalized")

        if self.is_confirmed:
            self._mark_as_completed()
            self._emit(
                "confirmed",
                f"Payment confirmed on blockchain with {self.confirmations} confirmations",
                NotificationType.SUCCESS,
                transaction_hash=self.transaction_hash,
            )
            return True

        self._emit(
            "awaiting_confirmations",
            f"Payment broadcast but awaiting confirmations "
            f"({self.confirmations}/{self.required_confirmations})",
            NotificationType.REMINDER,
        )
        return False

    def validate(self) -> bool:
        address_length = len(self.wallet_address.strip()) if self.wallet_address else 0
        if not (self.config.min_address_length <= address_length <= self.config.max_address_length):
            self._emit("validation_failed", "Invalid Bitcoin wallet address", NotificationType.ERROR)
            return False

        if self.exchange_rate <= 0:
            self._emit("validation_failed", "Invalid exchange rate", NotificationType.ERROR)
            return False

        if self.bitcoin_amount <= 0:
            self._emit("validation_failed", "Invalid Bitcoin amount", NotificationType.ERROR)
            return False

        self._emit(
            "validated",
            f"Bitcoin payment validation passed, converting {money(self.amount)} USD "
            f"to {self.bitcoin_amount:.8f} BTC",
        )
        return True

    def describe(self) -> str:
        state = "Confirmed" if self.is_confirmed else "Awaiting Confirmations"
        return (
            "Bitcoin Payment Details\n"
            "=======================\n"
            f"Blockchain: {self.network}\n"
            f"Wallet Address: {self.masked_wallet_address}\n"
            f"BTC Amount: {self.bitcoin_amount:.8f} BTC\n"
            f"USD Amount: {money(self.amount)}\n"
            f"Exchange Rate: 1 BTC = {money(self.exchange_rate)} USD\n"
            f"Network Fee: {self.network_fee_btc:.8f} BTC\n"
            f"Transaction Hash: {self.transaction_hash or 'Pending'}\n"
            f"Confirmations: {self.confirmations}/{self.required_confirmations}\n"
            f"Status: {state}"
        )

    def refund(self, refund_amount: Any) -> bool:
        """Send the refund as a new outbound transaction.

        A confirmed transfer cannot be reversed, so a successful refund
        broadcasts a separate transaction stored in ``refund_transaction_hash``.
        """
        self._emit("refund_requested", "Bitcoin refund request...")
        if not super().refund(refund_amount):
            return False

        refund_btc = self.convert_to_bitcoin(refund_amount)
        self.refund_transaction_hash = self._generate_hash()
        self._emit(
            "refund_broadcast",
            f"Bitcoin transactions are irreversible, sent {refund_btc:.8f} BTC to "
            f"{self.masked_wallet_address} in new transaction {self.refund_transaction_hash}",
            NotificationType.WARNING,
            refund_btc=refund_btc,
            refund_transaction_hash=self.refund_transaction_hash,
        )
        return True

    def cancel(self) -> bool:
        self._emit("cancel_requested", "Attempting to cancel Bitcoin payment...")
        if self.is_confirmed:
            self._emit(
                "cancel_rejected",
                "Cannot cancel - transaction confirmed on blockchain. Use refund to send "
                "Bitcoin back",
                NotificationType.ERROR,
            )
            return False

        if self.confirmations > 0:
            self._emit("partial_confirmations",
                       "Transaction has partial confirmations - cancellation may not succeed",
                       NotificationType.WARNING)
        return super().cancel()

    def check_confirmations(self) -> int:
        if not self.transaction_hash:
            self._emit("confirmations_checked", "No transaction hash available",
                       NotificationType.WARNING)
            return 0

        self._emit(
            "confirmations_checked",
            f"{self.transaction_hash}: {self.confirmations}/{self.required_confirmations} "
            "confirmations",
        )
        return self.confirmations

    def explorer_url(self) -> str:
        if not self.transaction_hash:
            return "Transaction not yet broadcasted"
        return f"{self.config.explorer_base_url}{self.transaction_hash}"

    def convert_to_bitcoin(self, usd_amount: Any) -> Decimal:
        """Convert USD to BTC, rounded to whole satoshis."""
        btc = to_decimal(usd_amount) / self.exchange_rate
        return btc.quantize(SATOSHI, rounding=ROUND_HALF_UP)

    def convert_to_usd(self, btc_amount: Any) -> Decimal:
        """Convert BTC to USD, rounded to cents.

        Cent rounding absorbs the satoshi rounding of :meth:`convert_to_bitcoin`,
        so converting an amount there and back returns it unchanged.
        """
        usd = to_decimal(btc_amount) * self.exchange_rate
        return usd.quantize(CENT, rounding=ROUND_HALF_UP)

    def _broadcast(self) -> bool:
        # Simulated node, always accepts
        self.transaction_hash = self._generate_hash()
        self._emit(
            "broadcast",
            f"Transaction broadcast successfully: {self.explorer_url()}",
            NotificationType.SUCCESS,
            transaction_hash=self.transaction_hash,
        )
        return True

    @staticmethod
    def _generate_hash() -> str:
        # Not a real SHA-256 transaction hash
        return uuid.uuid4().hex

    def __str__(self) -> str:
        return (
            f"Bitcoin: {self.bitcoin_amount:.8f} BTC ({money(self.amount)} USD) - "
            f"{self.confirmations}/{self.required_confirmations} confirmations - "
            f"{self.status.value}"
        )
