"""In-memory sink collecting payment events."""

from paymodel.models.events import PaymentEvent


class MemorySink:
    """Keep every received event in a list."""

    def __init__(self) -> None:
        self.events: list[PaymentEvent] = []

    def on_event(self, event: PaymentEvent) -> None:
        self.events.append(event)

    def messages(self) -> list[str]:
        return [event.message for event in self.events]

    def event_types(self) -> list[str]:
        return [event.event_type for event in self.events]

    def for_transaction(self, transaction_id: str) -> list[PaymentEvent]:
        """Events emitted by a single payment."""
        return [event for event in self.events if event.subject == transaction_id]

    def clear(self) -> None:
        self.events.clear()
