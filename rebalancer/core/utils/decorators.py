"""
Utility decorators for operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable, Sized
from typing import Any

from loguru import logger

from rebalancer.core.exceptions.rebalance import RebalancerException
from rebalancer.core.models.rebalance import RebalanceRequest


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if isinstance(value, RebalanceRequest):
        return value.to_dict()
    if isinstance(value, str):
        return {"chars": len(value)}
    if isinstance(value, Sized):
        return {"lines": len(value)}
    if hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    return value


def _extract_operation_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract loggable context from function arguments."""
    context = {}
    for param_name, value in bound_args.arguments.items():
        if param_name in ("self", "policy"):
            continue
        if param_name in ("portfolio", "request", "text", "lines", "results", "contribution"):
            context[param_name] = _serialize_parameter_value(value)
    return context


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Setup logging context for a core operation."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_operation_context(bound_args),
    }


def _describe_result(result: Any) -> dict[str, Any]:
    """Summarize a successful result for logging."""
    description: dict[str, Any] = {"result_type": type(result).__name__}
    if isinstance(result, Sized) and not isinstance(result, str):
        description["result_size"] = len(result)
    return description


def _execute_with_logging(
    func: Callable[..., Any],
    context: dict[str, Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    """Execute function, logging returned typed errors as failures."""
    func_name = func.__name__
    logger.debug(f"Operation started: {func_name}", extra=context)
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.error(
            f"Operation raised: {func_name}: {type(e).__name__}",
            extra={**context, "execution_time_ms": execution_time_ms},
        )
        raise

    execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
    if isinstance(result, RebalancerException):
        logger.warning(
            f"Operation rejected: {func_name}: {result.code}",
            extra={
                **context,
                "success": False,
                "execution_time_ms": execution_time_ms,
                "error_code": result.code,
                "error_message": str(result),
            },
        )
    else:
        logger.debug(
            f"Operation completed: {func_name}",
            extra={
                **context,
                "success": True,
                "execution_time_ms": execution_time_ms,
                **_describe_result(result),
            },
        )
    return result


def log_operation[F: Callable[..., Any]](func: F) -> F:
    """Decorator to log core operations with correlation IDs and timing."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        return _execute_with_logging(func, context, args, kwargs)

    return wrapper  # type: ignore
