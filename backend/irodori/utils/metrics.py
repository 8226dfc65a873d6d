"""
Irodori Metrics Collection
In-process counters and timings for the color endpoints.
"""
import time
from collections import defaultdict, Counter
from typing import Any, Dict, List, Optional
from threading import Lock


class MetricsCollector:
    """Simple in-process metrics collector."""

    def __init__(self):
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._retained_ratios: List[float] = []
        self._start_time = time.time()

    def increment(self, name: str, amount: int = 1):
        """Increment a named counter."""
        with self._lock:
            self._counters[name] += amount

    def increment_request_count(self, endpoint: str):
        """Count a request against an endpoint label."""
        self.increment("requests_total")
        self.increment(f"requests_total_{endpoint}")

    def increment_failure_count(self, error_type: str):
        """Count a failed request by error type."""
        self.increment(f"failed_total_{error_type}")

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def record_retained_ratio(self, retained: int, total: int):
        """Record the share of pixels kept by the hair filter."""
        if total <= 0:
            return
        with self._lock:
            self._retained_ratios.append(retained / total)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                operation: self._describe(timings)
                for operation, timings in self._timings.items()
                if timings
            }

    def get_retained_ratio_stats(self) -> Dict[str, float]:
        with self._lock:
            if not self._retained_ratios:
                return {}
            return self._describe(self._retained_ratios)

    def get_uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "retained_ratio_stats": self.get_retained_ratio_stats(),
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._retained_ratios.clear()
            self._start_time = time.time()

    @classmethod
    def _describe(cls, values: List[float]) -> Dict[str, float]:
        return {
            "count": len(values),
            "mean": sum(values) / len(values),
            "min": min(values),
            "max": max(values),
            "p50": cls._percentile(values, 50),
            "p95": cls._percentile(values, 95),
        }

    @staticmethod
    def _percentile(data: List[float], percentile: int) -> float:
        """Linear-interpolated percentile."""
        if not data:
            return 0.0

        sorted_data = sorted(data)
        k = (len(sorted_data) - 1) * percentile / 100
        f = int(k)
        c = k - f

        if f + 1 < len(sorted_data):
            return sorted_data[f] + c * (sorted_data[f + 1] - sorted_data[f])
        return sorted_data[f]


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()
