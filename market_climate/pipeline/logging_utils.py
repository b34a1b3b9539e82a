"""
Logging utilities for the pipeline with debug mode support.

Provides a decorator and a context manager for timing pipeline steps and
reporting failures without swallowing them.
"""
import logging
import functools
import time
import os
from typing import Callable, Any, TypeVar
from contextlib import contextmanager

# Module logger
logger = logging.getLogger(__name__)

# Type variable for decorators
F = TypeVar('F', bound=Callable[..., Any])

# Debug mode flag (can be set via environment variable or runtime)
_DEBUG_MODE = os.getenv("MARKET_CLIMATE_DEBUG", "false").lower() in ("true", "1", "yes")


def set_debug_mode(enabled: bool) -> None:
    """
    Enable or disable debug mode at runtime for all pipeline loggers.

    Args:
        enabled: True to enable debug logging, False for normal logging

    Examples:
        >>> from market_climate.pipeline.logging_utils import set_debug_mode
        >>> set_debug_mode(True)
        🔧 Pipeline debug mode: ON ✓
    """
    global _DEBUG_MODE
    _DEBUG_MODE = enabled

    level = logging.DEBUG if enabled else logging.INFO
    logging.getLogger("market_climate").setLevel(level)
    logger.setLevel(level)

    logger.info(f"🔧 Pipeline debug mode: {'ON ✓' if enabled else 'OFF'}")


def is_debug_mode() -> bool:
    """Check if debug mode is currently enabled."""
    return _DEBUG_MODE


def _describe_result(result: Any) -> str:
    if hasattr(result, "records") and hasattr(result, "series"):
        return f"{len(result.records)} records, {len(result.series)} series"
    if hasattr(result, "__len__"):
        return f"{len(result)} items"
    return type(result).__name__


def log_pipeline_step(func: F) -> F:
    """
    Decorator to log a pipeline step with timing and error reporting.

    Logs:
    - Start of the step with config class (if a dataclass argument is passed)
    - Execution time in milliseconds and result size
    - Detailed error information on failure (then re-raises)

    Usage:
        @log_pipeline_step
        def pivot_rows(rows, config):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        func_name = func.__name__

        config_info = ""
        config_obj = None
        for arg in list(args) + list(kwargs.values()):
            if hasattr(arg, "__dataclass_fields__"):
                config_info = f" config={arg.__class__.__name__}"
                config_obj = arg
                break

        logger.debug(f"🔄 Pipeline step: {func_name}{config_info}")

        if _DEBUG_MODE:
            logger.debug(f"  → Function: {func.__module__}.{func_name}")
            logger.debug(f"  → Args: {len(args)} positional, {len(kwargs)} keyword")
            if config_obj is not None:
                logger.debug(f"  → Config: {config_obj}")

        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"❌ Pipeline step failed: {func_name} "
                f"({elapsed_ms:.1f}ms, {type(e).__name__}: {e})"
            )
            if _DEBUG_MODE:
                logger.exception("  📋 Full traceback:")
            else:
                logger.error("  💡 Hint: Set MARKET_CLIMATE_DEBUG=true for full traceback")
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"✅ Pipeline step done: {func_name} "
            f"({elapsed_ms:.1f}ms, {_describe_result(result)})"
        )
        return result

    return wrapper  # type: ignore


@contextmanager
def log_data_preparation(description: str):
    """
    Context manager for logging data preparation steps with timing.

    Usage:
        with log_data_preparation("Sorting dates"):
            keys = sorted(keys)

    Args:
        description: Human-readable description of the preparation step
    """
    start = time.perf_counter()

    if _DEBUG_MODE:
        logger.debug(f"🔄 {description}...")

    try:
        yield

    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"  ✗ {description} failed ({elapsed_ms:.1f}ms): {e}")
        raise

    else:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if _DEBUG_MODE:
            logger.debug(f"  ✓ {description} ({elapsed_ms:.1f}ms)")
