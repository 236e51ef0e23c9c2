"""Tests for config and logging."""

import json
import logging
import sys
from decimal import Decimal

import pytest

from paymodel.config import (
    BitcoinConfig,
    CashConfig,
    CreditCardConfig,
    PaymentConfig,
    PayPalConfig,
)
from paymodel.exceptions import ConfigurationError
from paymodel.logging import JsonFormatter, get_logger, setup_logging
from paymodel.models import CashPayment

ENV_VARS = [
    "CREDIT_CARD_FEE_PERCENTAGE",
    "PAYPAL_FEE_PERCENTAGE",
    "PAYPAL_FIXED_FEE",
    "PAYPAL_TRANSACTION_LIMIT",
    "CASH_POLICY_LIMIT",
    "CASH_CURRENCY",
    "BITCOIN_FEE_PERCENTAGE",
    "BITCOIN_REQUIRED_CONFIRMATIONS",
    "BITCOIN_NETWORK",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment without any paymodel variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestMethodConfigs:
    """Tests for per-method configuration defaults."""

    def test_credit_card_defaults(self) -> None:
        config = CreditCardConfig()

        assert config.fee_percentage == Decimal("2.9")
        assert config.large_transaction_threshold == Decimal("10000")
        assert config.min_card_digits == 13
        assert config.max_card_digits == 19
        assert config.cvv_length == 3

    def test_paypal_defaults(self) -> None:
        config = PayPalConfig()

        assert config.fee_percentage == Decimal("3.5")
        assert config.fixed_fee == Decimal("0.30")
        assert config.transaction_limit == Decimal("10000")

    def test_cash_defaults(self) -> None:
        config = CashConfig()

        assert config.fee_percentage == Decimal("0")
        assert config.policy_limit == Decimal("10000")
        assert config.currency == "USD"
        assert config.denominations == (20, 10, 5, 1)

    def test_bitcoin_defaults(self) -> None:
        config = BitcoinConfig()

        assert config.fee_percentage == Decimal("0.5")
        assert config.network_fee_btc == Decimal("0.0001")
        assert config.required_confirmations == 3
        assert config.min_address_length == 26
        assert config.max_address_length == 35
        assert config.network == "Bitcoin Mainnet"


class TestPaymentConfig:
    """Tests for PaymentConfig."""

    def test_default_values(self) -> None:
        config = PaymentConfig()

        assert isinstance(config.credit_card, CreditCardConfig)
        assert isinstance(config.paypal, PayPalConfig)
        assert isinstance(config.cash, CashConfig)
        assert isinstance(config.bitcoin, BitcoinConfig)
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = PaymentConfig.from_env()

        assert config == PaymentConfig()

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        env = {
            "CREDIT_CARD_FEE_PERCENTAGE": "2.5",
            "PAYPAL_FEE_PERCENTAGE": "3.9",
            "PAYPAL_FIXED_FEE": "0.49",
            "PAYPAL_TRANSACTION_LIMIT": "5000",
            "CASH_POLICY_LIMIT": "3000",
            "CASH_CURRENCY": "EUR",
            "BITCOIN_FEE_PERCENTAGE": "1",
            "BITCOIN_REQUIRED_CONFIRMATIONS": "6",
            "BITCOIN_NETWORK": "Bitcoin Testnet",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        for name, value in env.items():
            clean_env.setenv(name, value)

        config = PaymentConfig.from_env()

        assert config.credit_card.fee_percentage == Decimal("2.5")
        assert config.paypal.fee_percentage == Decimal("3.9")
        assert config.paypal.fixed_fee == Decimal("0.49")
        assert config.paypal.transaction_limit == Decimal("5000")
        assert config.cash.policy_limit == Decimal("3000")
        assert config.cash.currency == "EUR"
        assert config.bitcoin.fee_percentage == Decimal("1")
        assert config.bitcoin.required_confirmations == 6
        assert config.bitcoin.network == "Bitcoin Testnet"
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("PAYPAL_FIXED_FEE", "thirty cents"),
            ("BITCOIN_REQUIRED_CONFIRMATIONS", "three"),
            ("SEED", "abc"),
        ],
    )
    def test_from_env_invalid(self, clean_env: pytest.MonkeyPatch, name: str, value: str) -> None:
        clean_env.setenv(name, value)

        with pytest.raises(ConfigurationError, match=name):
            PaymentConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_standard_format(self) -> None:
        setup_logging(level="DEBUG", format_type="standard")
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("paymodel").level == logging.DEBUG
        assert logging.getLogger("faker").level == logging.WARNING

    def test_json_format(self) -> None:
        setup_logging(level="INFO", format_type="json")

        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    def test_invalid_level_falls_back_to_info(self) -> None:
        setup_logging(level="NOPE")

        assert logging.getLogger().level == logging.INFO

    def test_replaces_existing_handlers(self) -> None:
        logging.getLogger().addHandler(logging.NullHandler())
        setup_logging()

        assert len(logging.getLogger().handlers) == 1


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        record = logging.LogRecord(
            name="paymodel.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Payment %s",
            args=("failed",),
            exc_info=kwargs.pop("exc_info", None),
        )
        for key, value in kwargs.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "paymodel.test"
        assert data["message"] == "Payment failed"
        assert "timestamp" in data

    def test_extra_fields(self) -> None:
        record = self._record(extra={"transaction_id": "TXN-1", "amount": Decimal("5")})
        data = json.loads(JsonFormatter().format(record))

        assert data["transaction_id"] == "TXN-1"
        assert data["amount"] == "5"

    def test_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record(exc_info=sys.exc_info())

        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_named_logger(self) -> None:
        assert get_logger("paymodel.models").name == "paymodel.models"

    def test_payment_events_use_module_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="paymodel"):
            payment = CashPayment(10, 10)
            payment.cancel()

        record = next(
            r for r in caplog.records if r.extra["event_type"] == "payment.cancelled"
        )
        assert record.name == "paymodel.models.payment"
        data = json.loads(JsonFormatter().format(record))
        assert data["event_type"] == "payment.cancelled"
        assert data["transaction_id"] == payment.transaction_id
