"""Search telemetry sinks."""

from hubsearch.telemetry.tracker import HistoryTelemetrySink, LoggingTelemetrySink, TelemetrySink

__all__ = ["HistoryTelemetrySink", "LoggingTelemetrySink", "TelemetrySink"]
