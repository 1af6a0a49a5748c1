"""
Observability helpers for the palette extraction pipeline.

Stage timing and memory logging around the expensive passes
(quantizer training and the full-image recount).
"""

import time
from contextlib import contextmanager
from typing import Any, Dict

import psutil
from loguru import logger


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, pixel_count: int = 0, color_count: int = 0):
    """Context manager for monitoring performance of operations."""
    start_time = time.perf_counter()
    start_memory = _rss_mb()

    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        memory_mb = max(_rss_mb(), start_memory)

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {duration_ms:.1f}ms: {error_msg}")
        else:
            logger.debug(f"Operation {operation_name} completed in {duration_ms:.1f}ms "
                         f"(pixels: {pixel_count}, colors: {color_count}, memory: {memory_mb:.1f}MB)")


def log_memory_usage(stage_name: str) -> Dict[str, Any]:
    """Log current memory usage for a specific stage."""
    memory_mb = _rss_mb()

    logger.debug(f"Memory usage at {stage_name}: {memory_mb:.1f}MB")

    return {
        'stage': stage_name,
        'memory_mb': memory_mb,
        'timestamp': time.time()
    }
