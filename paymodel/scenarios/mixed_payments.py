"""Scenario processing a heterogeneous batch of payments."""

import random

from paymodel.config import PaymentConfig
from paymodel.generators import PaymentGenerator
from paymodel.logging import get_logger
from paymodel.models import EventSink, PaymentStatus
from paymodel.store import PaymentLedger

logger = get_logger(__name__)


class MixedPaymentScenario:
    """Process a mix of credit card, PayPal, cash and bitcoin payments.

    Each payment is processed through the same ``process()`` call; a share
    of the completed ones is then refunded and some pending ones cancelled
    before processing, exercising every lifecycle branch.
    """

    def __init__(
        self,
        num_payments: int = 20,
        refund_rate: float = 0.1,
        cancel_rate: float = 0.05,
        seed: int | None = None,
        config: PaymentConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        """Initialize mixed payment scenario.

        Parameters
        ----------
        num_payments : int
            Number of payments to generate.
        refund_rate : float
            Share of completed payments refunded in full (0.0 to 1.0).
        cancel_rate : float
            Share of payments cancelled before processing (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        config : PaymentConfig | None
            Payment policies; defaults to ``PaymentConfig()``.
        sink : EventSink | None
            Receiver for every payment event.
        """
        self.num_payments = num_payments
        self.refund_rate = refund_rate
        self.cancel_rate = cancel_rate
        self.seed = seed

        self.ledger = PaymentLedger()
        # Seeds the module random state as well
        self._generator = PaymentGenerator(seed=seed, config=config, sink=sink)

    def run(self) -> PaymentLedger:
        """Generate, process and record all payments.

        Returns
        -------
        PaymentLedger
            Ledger containing every payment in its final state.
        """
        logger.info(
            "Starting mixed payment scenario: %d payments, %.1f%% refunds, %.1f%% cancellations",
            self.num_payments,
            self.refund_rate * 100,
            self.cancel_rate * 100,
        )

        for payment in self._generator.generate_batch(self.num_payments):
            self.ledger.add(payment)

            if random.random() < self.cancel_rate:
                payment.cancel()
                continue

            if payment.process() and random.random() < self.refund_rate:
                payment.refund(payment.amount)

        logger.info(
            "Scenario complete: %d completed (%s), %d refunded, %d cancelled, %d failed",
            len(self.ledger.by_status(PaymentStatus.COMPLETED)),
            self.ledger.total_amount(PaymentStatus.COMPLETED),
            len(self.ledger.by_status(PaymentStatus.REFUNDED)),
            len(self.ledger.by_status(PaymentStatus.CANCELLED)),
            len(self.ledger.by_status(PaymentStatus.FAILED)),
        )
        return self.ledger
