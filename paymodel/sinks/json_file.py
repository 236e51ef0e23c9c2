"""JSON Lines sink for exporting payment events to a file."""

import json
from pathlib import Path

from paymodel.exceptions import SinkError
from paymodel.models.events import PaymentEvent
from paymodel.sinks.serialization import to_dict_fast


class JsonFileSink:
    """Append payment events to a JSON Lines file."""

    def __init__(self, output_dir: str | Path, filename: str = "payment_events.jsonl") -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write the events file.
        filename : str
            Name of the JSON Lines file inside ``output_dir``.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.file_path = self.output_dir / filename
        self.count = 0

    def on_event(self, event: PaymentEvent) -> None:
        line = json.dumps(to_dict_fast(event), ensure_ascii=False)
        try:
            with open(self.file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            raise SinkError(f"Cannot write to {self.file_path}: {exc}") from exc
        self.count += 1

    def close(self) -> None:
        """Print summary."""
        print(f"{self.count} events written to: {self.file_path}")
