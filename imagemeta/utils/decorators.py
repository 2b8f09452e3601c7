# ==================================================
# ===========  MODULE: logging decorators  =========
# ==================================================
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from imagemeta.utils.logger import get_error_logger

# Public API
__all__ = ["log_exceptions"]

F = TypeVar("F", bound=Callable[..., Any])


def _describe_operand(args: tuple) -> str:
    """Short description of the first positional argument (usually the image)."""
    if not args:
        return "no operand"
    shape = getattr(args[0], "shape", None)
    kind = type(args[0]).__name__
    return f"{kind} {tuple(shape)}" if shape is not None else kind


def log_exceptions(logger_name: str = "errors") -> Callable[[F], F]:
    """
    Record failures of an image operation in the error logger, then re-raise.

    The record names the operation, the exception and the type and shape of
    the operand, with the traceback attached.

    Parameters
    ----------
    logger_name : str, default 'errors'
        Error logger to write to (see :func:`get_error_logger`).
    """
    error_logger = get_error_logger(name=logger_name)

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                error_logger.error(
                    f"[{func.__name__}] {type(e).__name__}: {e} (operand: {_describe_operand(args)})",
                    exc_info=True,
                )
                raise
        return wrapper  # type: ignore[return-value]
    return decorator
