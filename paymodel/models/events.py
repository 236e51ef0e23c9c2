"""Event envelope emitted by payments while they change state."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from paymodel.models.enums import NotificationType

LOG_LEVELS = {
    NotificationType.INFO: logging.INFO,
    NotificationType.SUCCESS: logging.INFO,
    NotificationType.REMINDER: logging.INFO,
    NotificationType.WARNING: logging.WARNING,
    NotificationType.ERROR: logging.ERROR,
}


@dataclass
class PaymentEvent:
    """Standard event envelope for payment activity."""

    event_type: str  # payment.action (e.g., payment.completed)
    source: str  # Payment method display name
    subject: str  # Transaction ID affected
    message: str
    level: NotificationType = NotificationType.INFO
    data: dict = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    event_time: datetime = field(default_factory=datetime.now)

    @property
    def log_level(self) -> int:
        """Logging level matching the notification type."""
        return LOG_LEVELS[self.level]


class EventSink(Protocol):
    """Receiver for payment events."""

    def on_event(self, event: PaymentEvent) -> None: ...
