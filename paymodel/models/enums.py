"""Enumeration types for payment entities."""

from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class CardBrand(str, Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"
    AMERICAN_EXPRESS = "AMERICAN_EXPRESS"
    DISCOVER = "DISCOVER"
    DINERS_CLUB = "DINERS_CLUB"

    @property
    def display_name(self) -> str:
        """Human-readable brand name (``American Express``)."""
        return self.value.replace("_", " ").title()


class PayPalFundingSource(str, Enum):
    BALANCE = "BALANCE"
    BANK_ACCOUNT = "BANK_ACCOUNT"
    CARD = "CARD"
    PAYPAL_CREDIT = "PAYPAL_CREDIT"


class NotificationType(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    REMINDER = "REMINDER"
