"""
Performance monitoring utilities.

Records how long loading, normalization, filtering and export take, and logs a
warning whenever one of them runs past the configured threshold.
"""

import time
import functools
from typing import Callable, Any, Dict
import logging

import config

# Configure logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Collects operation durations keyed by operation name.
    """

    def __init__(self, slow_threshold: float = None):
        """
        Initialize performance monitor.

        Args:
            slow_threshold: Seconds after which an operation is logged as slow
        """
        self.metrics: Dict[str, list] = {}
        self.slow_threshold = (
            config.SLOW_OPERATION_SECONDS if slow_threshold is None else slow_threshold
        )

    def record(self, operation: str, duration: float):
        """
        Record an operation duration, warning when it exceeds the threshold.

        Args:
            operation: Name of the operation
            duration: Duration in seconds
        """
        self.metrics.setdefault(operation, []).append(duration)

        if duration > self.slow_threshold:
            logger.warning(
                f"Operation '{operation}' took {duration:.2f}s "
                f"(threshold: {self.slow_threshold}s)"
            )

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Get statistics for an operation.

        Returns:
            Dictionary with min, max, avg, total, count
        """
        durations = self.metrics.get(operation)
        if not durations:
            return {'min': 0, 'max': 0, 'avg': 0, 'total': 0, 'count': 0}

        return {
            'min': min(durations),
            'max': max(durations),
            'avg': sum(durations) / len(durations),
            'total': sum(durations),
            'count': len(durations)
        }

    def clear(self):
        """Clear all recorded metrics."""
        self.metrics.clear()

    def log_stats(self):
        """Log count and average duration of every recorded operation."""
        for op in sorted(self.metrics):
            stats = self.get_stats(op)
            logger.info(f"{op}: count={stats['count']} avg={stats['avg']:.4f}s")


# Global performance monitor instance
_global_monitor = PerformanceMonitor()


def get_monitor() -> PerformanceMonitor:
    """Get the global performance monitor instance."""
    return _global_monitor


def monitor_performance(operation_name: str = None):
    """
    Decorator recording the wrapped function's duration on the global monitor.

    Args:
        operation_name: Name for the operation (defaults to function name)

    Example:
        @monitor_performance("normalize_results")
        def normalize_results(parsed):
            ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _global_monitor.record(op_name, time.perf_counter() - start_time)

        return wrapper
    return decorator


class measure_time:
    """
    Context manager recording the duration of a block.

    Example:
        with measure_time("fetch_results"):
            response = requests.get(url)
    """

    def __init__(self, operation_name: str):
        self.name = operation_name
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _global_monitor.record(self.name, time.perf_counter() - self.start_time)
