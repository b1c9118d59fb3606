"""Per-object stage timing."""

import time
from typing import Dict, Any
from collections import defaultdict


class MetricsCollector:
    """
    Collects stage timings for one pipeline run.
    Implements IMetricsCollector protocol.
    """

    def __init__(self):
        self._start_time = time.monotonic()
        self._timers: Dict[str, float] = {}
        self._metrics: Dict[str, list] = defaultdict(list)

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        self._timers[name] = time.monotonic()

    def stop_timer(self, name: str) -> float:
        """
        Stop a named timer and return elapsed time.

        Args:
            name: Timer name

        Returns:
            Elapsed time in seconds

        Raises:
            KeyError: If timer was not started
        """
        if name not in self._timers:
            raise KeyError(f"Timer '{name}' was not started")

        elapsed = time.monotonic() - self._timers.pop(name)
        self.record_metric(f"{name}_duration", elapsed)
        return elapsed

    def record_metric(self, name: str, value: Any) -> None:
        """Record a metric value."""
        self._metrics[name].append(value)

    def get_metric(self, name: str) -> list:
        """Get all values for a metric."""
        return self._metrics.get(name, [])

    def get_summary(self) -> Dict[str, Any]:
        """Total elapsed time plus the summed value of each metric."""
        return {
            "total_elapsed": self.elapsed_time(),
            "metrics": {name: sum(values) for name, values in self._metrics.items() if values},
        }

    def format_summary(self) -> str:
        """One-line summary for the completion log."""
        summary = self.get_summary()
        parts = [f"{name}={value:.2f}s" for name, value in summary["metrics"].items()]
        parts.append(f"total={summary['total_elapsed']:.2f}s")
        return ", ".join(parts)

    def elapsed_time(self) -> float:
        """Get total elapsed time since initialization."""
        return time.monotonic() - self._start_time
