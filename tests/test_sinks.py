"""Tests for event sinks."""

import json
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from paymodel.exceptions import SinkError
from paymodel.models import CashPayment, NotificationType, PaymentEvent
from paymodel.sinks import ConsoleSink, JsonFileSink, MemorySink


@pytest.fixture
def event() -> PaymentEvent:
    return PaymentEvent(
        event_type="payment.completed",
        source="Cash",
        subject="TXN-20260101120000-ABC123",
        message="Payment completed: TXN-20260101120000-ABC123",
        level=NotificationType.SUCCESS,
        data={"fee": Decimal("0"), "total": Decimal("100")},
    )


class TestPaymentEvent:
    """Tests for PaymentEvent."""

    def test_defaults(self, event: PaymentEvent) -> None:
        other = PaymentEvent(event_type="payment.x", source="Cash", subject="TXN-1", message="m")

        assert len(event.event_id) == 32
        assert event.event_id != other.event_id
        assert other.level == NotificationType.INFO
        assert other.data == {}

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (NotificationType.INFO, 20),
            (NotificationType.SUCCESS, 20),
            (NotificationType.REMINDER, 20),
            (NotificationType.WARNING, 30),
            (NotificationType.ERROR, 40),
        ],
    )
    def test_log_level(self, level: NotificationType, expected: int) -> None:
        event = PaymentEvent(event_type="payment.x", source="Cash", subject="T", message="m", level=level)

        assert event.log_level == expected


class TestMemorySink:
    """Tests for MemorySink."""

    def test_collects_events(self, event: PaymentEvent) -> None:
        sink = MemorySink()
        sink.on_event(event)

        assert sink.events == [event]
        assert sink.messages() == [event.message]
        assert sink.event_types() == ["payment.completed"]

    def test_for_transaction(self) -> None:
        sink = MemorySink()
        first = CashPayment(10, 10, sink=sink)
        second = CashPayment(20, 20, sink=sink)
        first.process()
        second.process()

        assert all(e.subject == first.transaction_id for e in sink.for_transaction(first.transaction_id))
        assert len(sink.for_transaction(first.transaction_id)) + len(
            sink.for_transaction(second.transaction_id)
        ) == len(sink.events)

    def test_clear(self, event: PaymentEvent) -> None:
        sink = MemorySink()
        sink.on_event(event)
        sink.clear()

        assert sink.events == []


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_init_default(self) -> None:
        sink = ConsoleSink()

        assert sink.pretty is False
        assert sink.show_data is False
        assert sink._counts == {}

    def test_plain_line(self, event: PaymentEvent, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()
        sink.on_event(event)
        captured = capsys.readouterr()

        assert captured.out.startswith("[TXN-20260101120000-ABC123] SUCCESS")
        assert "Payment completed" in captured.out
        assert sink._counts == {"Cash": 1}

    def test_show_data(self, event: PaymentEvent, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(show_data=True).on_event(event)
        captured = capsys.readouterr()

        assert '{"fee": "0", "total": "100"}' in captured.out

    def test_pretty(self, event: PaymentEvent, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(pretty=True).on_event(event)
        data = json.loads(capsys.readouterr().out)

        assert data["event_type"] == "payment.completed"
        assert data["level"] == "SUCCESS"
        assert data["data"]["total"] == "100"

    def test_close_summary(self, event: PaymentEvent, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()
        sink.on_event(event)
        sink.on_event(event)
        capsys.readouterr()

        sink.close()
        captured = capsys.readouterr()

        assert "Console Sink Summary" in captured.out
        assert "Cash: 2 events" in captured.out


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "nested" / "events"
        JsonFileSink(output_dir)

        assert output_dir.is_dir()

    def test_writes_json_lines(self, tmp_path: Path, event: PaymentEvent) -> None:
        sink = JsonFileSink(tmp_path)
        sink.on_event(event)
        sink.on_event(event)

        lines = sink.file_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["subject"] == "TXN-20260101120000-ABC123"
        assert sink.count == 2

    def test_payment_events_written(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path, filename="cash.jsonl")
        payment = CashPayment(10, 20, sink=sink)
        payment.process()

        records = [json.loads(line) for line in (tmp_path / "cash.jsonl").read_text().splitlines()]
        assert records[-1]["event_type"] == "payment.completed"
        assert records[-1]["data"] == {"fee": "0", "total": "10"}

    def test_write_failure_raises_sink_error(self, tmp_path: Path, event: PaymentEvent) -> None:
        sink = JsonFileSink(tmp_path)

        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(SinkError, match="denied"):
                sink.on_event(event)
        assert sink.count == 0

    def test_close(self, tmp_path: Path, event: PaymentEvent, capsys: pytest.CaptureFixture) -> None:
        sink = JsonFileSink(tmp_path)
        sink.on_event(event)
        sink.close()

        assert "1 events written to" in capsys.readouterr().out
