"""Consistent try/except/log wrappers for operations that degrade gracefully."""

from typing import Any, Awaitable, Callable, Optional

from gourmetnet.utils.logger import logger


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
    """
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


def safe_execute_sync(
    func: Callable[[], Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Any = None,
    reraise: bool = False,
) -> Any:
    """Run ``func`` and return its result, or ``default_return`` if it raises.

    Args:
        func: Callable to execute (no args).
        operation_name: Description for logging (e.g., "Direct JSON parse").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception. Default: None.
        reraise: If True, re-raise exception after logging. Default: False.

    Returns:
        Result of func if successful, default_return otherwise.

    Raises:
        Exception: Original exception if reraise=True.
    """
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return


async def safe_execute_async(
    coro: Awaitable[Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Optional[Any] = None,
    reraise: bool = False,
) -> Any:
    """Async version of safe_execute_sync. Same behavior and arguments."""
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return
