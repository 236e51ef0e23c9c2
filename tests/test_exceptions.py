"""Tests for custom exception hierarchy."""

from paymodel.exceptions import (
    ConfigurationError,
    DuplicatePaymentError,
    InsufficientTenderError,
    InvalidAmountError,
    InvalidPaymentDetailsError,
    PaymentError,
    PaymentNotFoundError,
    SinkError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_payment_error_is_exception(self) -> None:
        assert isinstance(PaymentError("test"), Exception)

    def test_invalid_amount_is_value_error(self) -> None:
        err = InvalidAmountError("test")
        assert isinstance(err, PaymentError)
        assert isinstance(err, ValueError)

    def test_insufficient_tender_is_value_error(self) -> None:
        err = InsufficientTenderError("test")
        assert isinstance(err, PaymentError)
        assert isinstance(err, ValueError)

    def test_invalid_details_is_value_error(self) -> None:
        err = InvalidPaymentDetailsError("test")
        assert isinstance(err, PaymentError)
        assert isinstance(err, ValueError)

    def test_not_found_is_key_error(self) -> None:
        err = PaymentNotFoundError("test")
        assert isinstance(err, PaymentError)
        assert isinstance(err, KeyError)

    def test_duplicate_is_payment_error(self) -> None:
        assert isinstance(DuplicatePaymentError("test"), PaymentError)

    def test_configuration_error_is_payment_error(self) -> None:
        assert isinstance(ConfigurationError("test"), PaymentError)

    def test_sink_error_is_payment_error(self) -> None:
        assert isinstance(SinkError("test"), PaymentError)

    def test_not_found_message_is_not_quoted(self) -> None:
        err = PaymentNotFoundError("Payment TXN-1 not found")
        assert str(err) == "Payment TXN-1 not found"
