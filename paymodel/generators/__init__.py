"""Sample data generators."""

from paymodel.generators.payment import PaymentGenerator

__all__ = ["PaymentGenerator"]
