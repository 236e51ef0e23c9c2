"""Custom exception hierarchy for paymodel."""


class PaymentError(Exception):
    """Base exception for all paymodel errors."""


class InvalidAmountError(PaymentError, ValueError):
    """Raised when a payment is constructed with a non-positive amount."""


class InsufficientTenderError(PaymentError, ValueError):
    """Raised when tendered cash does not cover the amount due."""


class InvalidPaymentDetailsError(PaymentError, ValueError):
    """Raised when a required payment detail is missing at construction."""


class PaymentNotFoundError(PaymentError, KeyError):
    """Raised when a referenced payment does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class DuplicatePaymentError(PaymentError):
    """Raised when a payment with the same transaction id is recorded twice."""


class ConfigurationError(PaymentError):
    """Raised when configuration is invalid or missing."""


class SinkError(PaymentError):
    """Raised when a sink operation fails."""
