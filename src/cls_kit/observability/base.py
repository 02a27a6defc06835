# src/cls_kit/observability/base.py

import logging
from typing import Protocol

Labels = dict[str, str]


class MetricsHook(Protocol):
    """Receives decoder metrics. Implementations forward to a real backend.

    Names come from `cls_kit.observability.names`. Durations are in
    milliseconds.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: Labels | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: Labels | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        return None

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        return None


class LoggingMetricsHook:
    """Writes every metric as a log record.

    For hosts without a metrics backend. Records go to the
    `cls_kit.metrics` logger unless another logger is given.
    """

    def __init__(
        self, logger: logging.Logger | None = None, level: int = logging.DEBUG
    ) -> None:
        self.logger = logger or logging.getLogger("cls_kit.metrics")
        self.level = level

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        self.logger.log(self.level, "%s=%.3fms %s", name, value_ms, labels or {})

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        self.logger.log(self.level, "%s+=%d %s", name, value, labels or {})
