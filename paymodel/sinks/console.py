"""Console sink for watching payments as they run."""

import json

from paymodel.models.events import PaymentEvent
from paymodel.sinks.serialization import to_dict_fast


class ConsoleSink:
    """Output payment events to console (stdout)."""

    def __init__(self, pretty: bool = False, show_data: bool = False) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Print each event as indented JSON instead of a single line.
        show_data : bool
            Append the event data to single-line output.
        """
        self.pretty = pretty
        self.show_data = show_data
        self._counts: dict[str, int] = {}

    def on_event(self, event: PaymentEvent) -> None:
        if self.pretty:
            print(json.dumps(to_dict_fast(event), indent=2, ensure_ascii=False))
        else:
            line = f"[{event.subject}] {event.level.value:<8} {event.message}"
            if self.show_data and event.data:
                line += f" {json.dumps(to_dict_fast(event)['data'], ensure_ascii=False)}"
            print(line)

        self._counts[event.source] = self._counts.get(event.source, 0) + 1

    def close(self) -> None:
        """Print summary."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for source, count in self._counts.items():
            print(f"  {source}: {count} events")
