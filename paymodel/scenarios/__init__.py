"""Scenarios running payments end to end."""

from paymodel.scenarios.mixed_payments import MixedPaymentScenario

__all__ = ["MixedPaymentScenario"]
