"""In-memory stores for processed payments."""

from paymodel.store.ledger import PaymentLedger

__all__ = ["PaymentLedger"]
