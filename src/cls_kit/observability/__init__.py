"""Metrics hooks for the decoder and exporter.

Nothing is emitted unless a hook is passed in; the default drops everything.
"""

from . import names
from .base import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

__all__ = [
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
]
