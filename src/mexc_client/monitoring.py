"""
Performance monitoring and statistics for MEXC client.

Tracks per-request latency and outcome, broken down by endpoint and by the
signing scheme that authenticated the request.
"""

import time
from collections import Counter, defaultdict, deque
from dataclasses import dataclass
from typing import Deque, Dict, List

from .models.requests import SigningScheme


@dataclass(frozen=True)
class RequestMetrics:
    """Metrics for a single request."""
    endpoint: str
    method: str
    scheme: SigningScheme
    status_code: int
    duration_ms: float
    timestamp: float

    @property
    def succeeded(self) -> bool:
        return 200 <= self.status_code < 400


@dataclass
class Statistics:
    """Client performance statistics."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_duration_ms: float = 0.0
    avg_duration_ms: float = 0.0
    min_duration_ms: float = float("inf")
    max_duration_ms: float = 0.0

    def update(self, metrics: RequestMetrics) -> None:
        """Update statistics with new request metrics."""
        self.total_requests += 1
        self.total_duration_ms += metrics.duration_ms
        self.avg_duration_ms = self.total_duration_ms / self.total_requests
        self.min_duration_ms = min(self.min_duration_ms, metrics.duration_ms)
        self.max_duration_ms = max(self.max_duration_ms, metrics.duration_ms)

        if metrics.succeeded:
            self.successful_requests += 1
        else:
            self.failed_requests += 1


class PerformanceMonitor:
    """Monitors client performance and tracks metrics."""

    def __init__(self, max_history: int = 1000):
        self._max_history = max_history
        self._statistics = Statistics()
        self._request_history: Deque[RequestMetrics] = deque(maxlen=max_history)
        self._endpoint_stats: Dict[str, Deque[RequestMetrics]] = defaultdict(
            lambda: deque(maxlen=max_history)
        )
        self._scheme_counts: Counter = Counter()
        self._start_time = time.time()

    def record_request(
        self,
        endpoint: str,
        method: str,
        scheme: SigningScheme,
        status_code: int,
        duration_ms: float,
    ) -> None:
        """Record metrics for a completed (or failed) request."""
        metrics = RequestMetrics(
            endpoint=endpoint,
            method=method,
            scheme=scheme,
            status_code=status_code,
            duration_ms=duration_ms,
            timestamp=time.time(),
        )

        self._statistics.update(metrics)
        self._request_history.append(metrics)
        self._endpoint_stats[f"{method} {endpoint}"].append(metrics)
        self._scheme_counts[scheme] += 1

    @property
    def statistics(self) -> Statistics:
        """Get current statistics snapshot."""
        return self._statistics

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_endpoint_stats(self, endpoint: str, method: str) -> Dict[str, float]:
        """Get statistics for a specific endpoint."""
        requests = self._endpoint_stats.get(f"{method} {endpoint}")

        if not requests:
            return {
                "count": 0,
                "avg_duration_ms": 0.0,
                "min_duration_ms": 0.0,
                "max_duration_ms": 0.0,
                "success_rate": 0.0,
            }

        durations = [r.duration_ms for r in requests]
        successful = sum(1 for r in requests if r.succeeded)

        return {
            "count": len(requests),
            "avg_duration_ms": sum(durations) / len(durations),
            "min_duration_ms": min(durations),
            "max_duration_ms": max(durations),
            "success_rate": successful / len(requests),
        }

    def get_scheme_counts(self) -> Dict[SigningScheme, int]:
        """Number of recorded requests per signing scheme."""
        return dict(self._scheme_counts)

    def get_recent_requests(self, count: int = 10) -> List[RequestMetrics]:
        """Get most recent requests."""
        return list(self._request_history)[-count:]

    def get_error_rate(self, window_seconds: float = 60.0) -> float:
        """Share of failed requests within the recent time window."""
        cutoff_time = time.time() - window_seconds
        recent_requests = [r for r in self._request_history if r.timestamp >= cutoff_time]

        if not recent_requests:
            return 0.0

        failed_count = sum(1 for r in recent_requests if not r.succeeded)
        return failed_count / len(recent_requests)

    def reset(self) -> None:
        """Reset all statistics and history."""
        self._statistics = Statistics()
        self._request_history.clear()
        self._endpoint_stats.clear()
        self._scheme_counts.clear()
        self._start_time = time.time()
