"""
Observability utilities for the linalg library.

This module provides:
- Logging configuration for the ``linalg`` logger hierarchy
- A lightweight execution profiler for timing matrix operations
"""

import logging
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Optional, Dict, List

from .config import LOGGER_NAME


# ============================================================================
# Logging Configuration
# ============================================================================

def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for the linalg library.

    Library modules only create module-level loggers; handlers are attached
    here, by the application. Calling this again replaces earlier handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs
    """
    log_level = getattr(logging, level.upper())

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    linalg_logger = logging.getLogger(LOGGER_NAME)
    linalg_logger.setLevel(log_level)
    for handler in list(linalg_logger.handlers):
        linalg_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    linalg_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(detailed_formatter)
        linalg_logger.addHandler(file_handler)

    linalg_logger.propagate = False

    return linalg_logger


# ============================================================================
# Performance Profiling
# ============================================================================

class ExecutionProfiler:
    """
    Records how long named matrix operations take.

    Example:
        profiler = ExecutionProfiler()

        with profiler.profile("B ** 5"):
            result = m ** 5

        profiler.print_summary()
    """

    def __init__(self):
        self.aggregated: Dict[str, List[float]] = defaultdict(list)

    @contextmanager
    def profile(self, name: str):
        """Context manager timing a code block under ``name``."""
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.aggregated[name].append(time.perf_counter() - start_time)

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """Aggregated count/total/mean/min/max per operation name."""
        summary = {}
        for name, durations in self.aggregated.items():
            if durations:
                summary[name] = {
                    'count': len(durations),
                    'total': sum(durations),
                    'mean': sum(durations) / len(durations),
                    'min': min(durations),
                    'max': max(durations)
                }
        return summary

    def print_summary(self):
        summary = self.get_summary()

        print("\n" + "=" * 72)
        print("EXECUTION PROFILE SUMMARY")
        print("=" * 72)
        print(f"{'Operation':<32} {'Count':>8} {'Total (s)':>14} {'Mean (s)':>14}")
        print("-" * 72)

        for name, stats in sorted(summary.items(), key=lambda x: x[1]['total'], reverse=True):
            print(f"{name:<32} {stats['count']:>8} {stats['total']:>14.6f} {stats['mean']:>14.6f}")

        print("=" * 72 + "\n")

    def reset(self):
        """Clear all profiling data."""
        self.aggregated.clear()


# Global profiler instance
_global_profiler = ExecutionProfiler()


def get_profiler() -> ExecutionProfiler:
    """Get the global profiler instance."""
    return _global_profiler
