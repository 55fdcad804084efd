"""Diagnostics and profiling utilities."""

from logo_metrics.diagnostics.tracker import DiagnosticsTracker, Timer, TimingRecord

__all__ = ["DiagnosticsTracker", "Timer", "TimingRecord"]
