"""Event sinks receiving payment activity."""

from paymodel.sinks.console import ConsoleSink
from paymodel.sinks.json_file import JsonFileSink
from paymodel.sinks.memory import MemorySink

__all__ = ["ConsoleSink", "JsonFileSink", "MemorySink"]
