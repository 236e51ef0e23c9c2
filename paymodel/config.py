"""Configuration management for paymodel.

Every fee rate, policy limit and confirmation threshold used by the payment
variants lives here instead of as a literal inside the models.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Callable, TypeVar

from paymodel.exceptions import ConfigurationError

T = TypeVar("T")


@dataclass
class CreditCardConfig:
    """Credit card processing policy."""

    fee_percentage: Decimal = Decimal("2.9")
    large_transaction_threshold: Decimal = Decimal("10000")
    min_card_digits: int = 13
    max_card_digits: int = 19
    cvv_length: int = 3


@dataclass
class PayPalConfig:
    """PayPal processing policy."""

    fee_percentage: Decimal = Decimal("3.5")
    fixed_fee: Decimal = Decimal("0.30")
    transaction_limit: Decimal = Decimal("10000")


@dataclass
class CashConfig:
    """Cash handling policy."""

    fee_percentage: Decimal = Decimal("0")
    policy_limit: Decimal = Decimal("10000")
    currency: str = "USD"
    # Bills used when breaking down change, largest first
    denominations: tuple[int, ...] = (20, 10, 5, 1)
    pen_check_threshold: Decimal = Decimal("50")
    watermark_check_threshold: Decimal = Decimal("100")


@dataclass
class BitcoinConfig:
    """Bitcoin processing policy."""

    fee_percentage: Decimal = Decimal("0.5")
    network_fee_btc: Decimal = Decimal("0.0001")
    required_confirmations: int = 3
    min_address_length: int = 26
    max_address_length: int = 35
    network: str = "Bitcoin Mainnet"
    explorer_base_url: str = "https://blockchain.info/tx/"


@dataclass
class PaymentConfig:
    """Main configuration for paymodel."""

    credit_card: CreditCardConfig = field(default_factory=CreditCardConfig)
    paypal: PayPalConfig = field(default_factory=PayPalConfig)
    cash: CashConfig = field(default_factory=CashConfig)
    bitcoin: BitcoinConfig = field(default_factory=BitcoinConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "PaymentConfig":
        """Create config from environment variables.

        Raises
        ------
        ConfigurationError
            If a variable is set but cannot be parsed.
        """
        import os

        def read(name: str, default: str, parse: Callable[[str], T]) -> T:
            raw = os.getenv(name, default)
            try:
                return parse(raw)
            except (InvalidOperation, ValueError) as exc:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from exc

        credit_card = CreditCardConfig(
            fee_percentage=read("CREDIT_CARD_FEE_PERCENTAGE", "2.9", Decimal),
        )

        paypal = PayPalConfig(
            fee_percentage=read("PAYPAL_FEE_PERCENTAGE", "3.5", Decimal),
            fixed_fee=read("PAYPAL_FIXED_FEE", "0.30", Decimal),
            transaction_limit=read("PAYPAL_TRANSACTION_LIMIT", "10000", Decimal),
        )

        cash = CashConfig(
            policy_limit=read("CASH_POLICY_LIMIT", "10000", Decimal),
            currency=os.getenv("CASH_CURRENCY", "USD"),
        )

        bitcoin = BitcoinConfig(
            fee_percentage=read("BITCOIN_FEE_PERCENTAGE", "0.5", Decimal),
            required_confirmations=read("BITCOIN_REQUIRED_CONFIRMATIONS", "3", int),
            network=os.getenv("BITCOIN_NETWORK", "Bitcoin Mainnet"),
        )

        seed = os.getenv("SEED")

        return cls(
            credit_card=credit_card,
            paypal=paypal,
            cash=cash,
            bitcoin=bitcoin,
            seed=read("SEED", seed, int) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
