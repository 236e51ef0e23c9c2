#!/usr/bin/env python3
"""Run a batch of mixed payments and print their summaries.

Every payment goes through the same ``process()`` call; the output shows
how each method validates, charges fees and completes differently.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from paymodel.config import PaymentConfig
from paymodel.logging import get_logger, setup_logging
from paymodel.models import PaymentStatus
from paymodel.scenarios import MixedPaymentScenario
from paymodel.sinks import ConsoleSink, JsonFileSink, MemorySink

logger = get_logger(__name__)


def print_fee_table(ledger) -> None:
    """Print method, fee rate and fee for every payment."""
    print(f"\n{'='*60}")
    print("Fees by payment method")
    print("=" * 60)
    for payment in ledger:
        print(
            f"{payment.payment_method:<28} {payment.transaction_fee_percentage:>5}% "
            f"= ${payment.transaction_fee:,.2f}"
        )


def main() -> None:
    """Main entry point."""
    config = PaymentConfig.from_env()

    parser = argparse.ArgumentParser(description="Process a batch of simulated payments")
    parser.add_argument(
        "--payments",
        type=int,
        default=8,
        help="Number of payments to generate (default: 8)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: SEED or 42)",
    )
    parser.add_argument(
        "--refund-rate",
        type=float,
        default=0.1,
        help="Share of completed payments refunded (default: 0.1)",
    )
    parser.add_argument(
        "--cancel-rate",
        type=float,
        default=0.05,
        help="Share of payments cancelled before processing (default: 0.05)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write payment events as JSON Lines to this directory",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every payment event to the console",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=config.log_format,
        help="Log format (default: LOG_FORMAT or standard)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_format)

    if args.output_dir is not None:
        sink = JsonFileSink(args.output_dir)
    elif args.verbose:
        sink = ConsoleSink()
    else:
        sink = MemorySink()

    scenario = MixedPaymentScenario(
        num_payments=args.payments,
        refund_rate=args.refund_rate,
        cancel_rate=args.cancel_rate,
        seed=args.seed,
        config=config,
        sink=sink,
    )
    ledger = scenario.run()
    logger.info("Processed %d payments with seed %d", len(ledger), args.seed)

    for payment in ledger:
        print(f"\n{payment.summary()}")

    print_fee_table(ledger)

    print(f"\n{'='*60}")
    print("Totals")
    print("=" * 60)
    for status, count in ledger.status_counts().items():
        print(f"  {status.value}: {count}")
    print(f"  Collected: ${ledger.total_amount(PaymentStatus.COMPLETED):,.2f}")
    print(f"  Fees:      ${ledger.total_fees(PaymentStatus.COMPLETED):,.2f}")

    if hasattr(sink, "close"):
        sink.close()


if __name__ == "__main__":
    main()
