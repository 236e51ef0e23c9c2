"""Sample payment generator."""

import random
from decimal import Decimal
from typing import Iterator

from paymodel.config import PaymentConfig
from paymodel.generators.base import BaseGenerator
from paymodel.models import (
    BitcoinPayment,
    CardBrand,
    CashPayment,
    CreditCardPayment,
    EventSink,
    Payment,
    PayPalFundingSource,
    PayPalPayment,
)

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class PaymentGenerator(BaseGenerator):
    """Generate well-formed payments of every method.

    Every generated payment passes its own ``validate()``.
    """

    # Faker card types per brand; American Express is left out because its
    # 4-digit security code never passes the CVV check
    CARD_TYPES = {
        CardBrand.VISA: "visa16",
        CardBrand.MASTERCARD: "mastercard",
        CardBrand.DISCOVER: "discover",
        CardBrand.DINERS_CLUB: "diners",
    }
    BRAND_WEIGHTS = [0.45, 0.35, 0.12, 0.08]

    METHODS = ("credit_card", "paypal", "cash", "bitcoin")
    METHOD_WEIGHTS = [0.4, 0.25, 0.2, 0.15]

    # (low, high) amounts in USD per method
    AMOUNT_RANGES = {
        "credit_card": (5, 2500),
        "paypal": (5, 1500),
        "cash": (1, 400),
        "bitcoin": (50, 5000),
    }

    EXCHANGE_RATE_RANGE = (30000, 70000)

    def __init__(
        self,
        seed: int | None = None,
        config: PaymentConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        super().__init__(seed)
        self.config = config or PaymentConfig()
        self.sink = sink

    def credit_card(self, amount: Decimal | None = None) -> CreditCardPayment:
        brand = random.choices(list(self.CARD_TYPES), weights=self.BRAND_WEIGHTS, k=1)[0]
        card_type = self.CARD_TYPES[brand]
        return CreditCardPayment(
            amount=amount or self._amount("credit_card"),
            card_number=self.fake.credit_card_number(card_type=card_type),
            cardholder_name=self.fake.name(),
            expiration_date=self.fake.date_between(start_date="+30d", end_date="+5y"),
            cvv=self.fake.credit_card_security_code(card_type=card_type),
            card_brand=brand,
            config=self.config.credit_card,
            sink=self.sink,
        )

    def paypal(self, amount: Decimal | None = None) -> PayPalPayment:
        return PayPalPayment(
            amount=amount or self._amount("paypal"),
            paypal_email=self.fake.email(),
            funding_source=random.choice(list(PayPalFundingSource)),
            config=self.config.paypal,
            sink=self.sink,
        )

    def cash(self, amount: Decimal | None = None) -> CashPayment:
        amount = amount or self._amount("cash")
        # Customers hand over exact change or round up to the next $5, $20 or $100
        round_to = random.choice([0, 5, 20, 100])
        if round_to:
            tendered = (amount // round_to + 1) * round_to
        else:
            tendered = amount
        return CashPayment(
            amount=amount,
            amount_tendered=Decimal(tendered),
            cashier_name=self.fake.first_name(),
            register_number=random.randint(1, 12),
            config=self.config.cash,
            sink=self.sink,
        )

    def bitcoin(self, amount: Decimal | None = None) -> BitcoinPayment:
        rate = round(random.uniform(*self.EXCHANGE_RATE_RANGE), 2)
        return BitcoinPayment(
            amount=amount or self._amount("bitcoin"),
            wallet_address=self._wallet_address(),
            exchange_rate=Decimal(str(rate)),
            config=self.config.bitcoin,
            sink=self.sink,
        )

    def generate(self, method: str | None = None) -> Payment:
        """Generate a payment of the given method, or a weighted random one."""
        if method is None:
            method = random.choices(self.METHODS, weights=self.METHOD_WEIGHTS, k=1)[0]
        if method not in self.METHODS:
            raise ValueError(f"Unknown payment method: {method}")
        return getattr(self, method)()

    def generate_batch(self, count: int) -> Iterator[Payment]:
        for _ in range(count):
            yield self.generate()

    def _amount(self, method: str) -> Decimal:
        low, high = self.AMOUNT_RANGES[method]
        return Decimal(str(round(random.uniform(low, high), 2)))

    def _wallet_address(self) -> str:
        # Legacy P2PKH-looking address, 34 characters
        return "1" + "".join(random.choices(BASE58_ALPHABET, k=33))
