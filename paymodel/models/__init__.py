"""Payment domain models."""

from paymodel.models.bitcoin import BitcoinPayment
from paymodel.models.cash import CashPayment
from paymodel.models.credit_card import CreditCardPayment
from paymodel.models.enums import (
    CardBrand,
    NotificationType,
    PaymentStatus,
    PayPalFundingSource,
)
from paymodel.models.events import EventSink, PaymentEvent
from paymodel.models.payment import Payment
from paymodel.models.paypal import PayPalPayment

__all__ = [
    "BitcoinPayment",
    "CardBrand",
    "CashPayment",
    "CreditCardPayment",
    "EventSink",
    "NotificationType",
    "Payment",
    "PaymentEvent",
    "PaymentStatus",
    "PayPalFundingSource",
    "PayPalPayment",
]
