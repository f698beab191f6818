"""
Utility decorators for ledger operations.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

F = TypeVar("F", bound=Callable[..., Any])

# Arguments copied verbatim into the log context
_LOGGED_ARGUMENTS = ("trade_id", "symbol", "amount", "entry_price", "fee", "exchange")


def _describe_argument(name: str, value: Any) -> dict[str, Any]:
    """Log fields for one bound argument of a ledger call."""
    if name in _LOGGED_ARGUMENTS:
        return {name: value}
    if hasattr(value, "symbol") and hasattr(value, "amount"):
        # A TradeInput or Trade passed whole
        return {"symbol": value.symbol, "amount": value.amount}
    if isinstance(value, list | tuple):
        return {f"{name}_count": len(value)}
    return {}


def _call_context(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict:
    """Correlation id plus the loggable arguments of a call."""
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()

    context: dict[str, Any] = {"correlation_id": uuid.uuid4().hex[:8]}
    for name, value in bound.arguments.items():
        if name != "self":
            context.update(_describe_argument(name, value))
    return context


def _describe_result(result: Any) -> dict[str, Any]:
    """Log fields for a ledger call's return value."""
    if isinstance(result, bool | int | float | str):
        return {"result": result}
    trade_id = getattr(result, "id", None)
    if trade_id is not None:
        return {"result": trade_id}
    return {}


def log_ledger_operation(func: F) -> F:
    """Decorator to log ledger mutations with correlation IDs.

    Logs the call at DEBUG, then SUCCESS with the result or ERROR with the
    exception. Exceptions are re-raised unchanged.
    """
    operation = func.__name__

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _call_context(func, args, kwargs)
        logger.debug(f"Ledger operation started: {operation}", extra=context)
        started = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.error(
                f"Ledger operation failed: {operation}",
                extra={
                    **context,
                    "success": False,
                    "execution_time_ms": elapsed_ms,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.success(
            f"Ledger operation completed: {operation}",
            extra={
                **context,
                "success": True,
                "execution_time_ms": elapsed_ms,
                **_describe_result(result),
            },
        )
        return result

    return wrapper  # type: ignore
