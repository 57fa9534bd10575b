"""
Logging utilities for balance program operations.

This module configures structlog for the client and provides helpers for
tracking RPC calls and balance account operations with timing information.
"""

import inspect
import logging
import sys
import time
import functools
from typing import Dict, Any, Callable
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class OperationType(Enum):
    """Types of balance program operations for logging."""
    ACCOUNT_LOOKUP = "account_lookup"
    ACCOUNT_CREATION = "account_creation"
    CREDIT = "credit"
    DEBIT = "debit"
    RPC_CALL = "rpc_call"
    TRANSACTION = "transaction"
    HEALTH_CHECK = "health_check"


class LogLevel(Enum):
    """Log levels for balance program operations."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure stdlib logging and structlog for the command-line client.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines instead of the console renderer
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _start_operation(operation_type: OperationType, operation_name: str, level: LogLevel) -> Dict[str, Any]:
    start_time = time.time()
    log_data = {
        "operation_id": f"{operation_name}_{int(start_time)}",
        "operation_type": operation_type.value,
        "operation_name": operation_name,
    }
    getattr(logger, level.value)("Operation started", status="started", **log_data)
    log_data["_start_time"] = start_time
    return log_data


def _finish_operation(log_data: Dict[str, Any], level: LogLevel, error: Exception = None) -> None:
    data = dict(log_data)
    execution_time = time.time() - data.pop("_start_time")
    data.update({
        "execution_time_seconds": execution_time,
        "performance_category": _categorize_performance(execution_time)
    })

    if error is None:
        getattr(logger, level.value)("Operation completed", status="completed", success=True, **data)
    else:
        logger.error(
            "Operation failed",
            status="failed",
            success=False,
            error_type=type(error).__name__,
            error_message=str(error),
            **data
        )


def log_blockchain_operation(
    operation_type: OperationType,
    operation_name: str,
    level: LogLevel = LogLevel.INFO
):
    """
    Decorator for logging balance program operations with timing.

    Failures are logged and re-raised unchanged.

    Args:
        operation_type: Type of operation
        operation_name: Name of the operation
        level: Log level for start and completion events
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            log_data = _start_operation(operation_type, operation_name, level)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _finish_operation(log_data, level, error=e)
                raise
            _finish_operation(log_data, level)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            log_data = _start_operation(operation_type, operation_name, level)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _finish_operation(log_data, level, error=e)
                raise
            _finish_operation(log_data, level)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def _categorize_performance(execution_time: float) -> str:
    """
    Categorize performance based on execution time.

    Args:
        execution_time: Execution time in seconds

    Returns:
        Performance category string
    """
    if execution_time < 0.1:
        return "excellent"
    elif execution_time < 0.5:
        return "good"
    elif execution_time < 2.0:
        return "acceptable"
    elif execution_time < 10.0:
        return "slow"
    else:
        return "very_slow"


def create_operation_logger(component_name: str) -> structlog.BoundLogger:
    """
    Create a logger bound to a specific component.

    The logger stays lazy, so it picks up configuration applied after import.

    Args:
        component_name: Name of the component

    Returns:
        Bound logger with component context
    """
    return structlog.get_logger(component_name, component=component_name)
