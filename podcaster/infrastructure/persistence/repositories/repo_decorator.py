"""Repository decorator for standardizing DB operations.

Wraps repository methods with:
- Structured logging with context and timing information
- Error classification for SQLAlchemy failures (logged, then re-raised)

Errors are never swallowed here; the service layer decides how a storage
failure is reported.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)

from podcaster.config import get_logger
from podcaster.domain.exceptions import EntityNotFoundError

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        @db_operation("find_one")
        async def find_one(self, criteria: dict) -> User | None:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(kwargs)

            def elapsed_ms() -> float:
                return (time.perf_counter() - start_time) * 1000

            try:
                logger.trace(
                    f"DB operation starting: {repo_name}.{func_name}",
                    operation=func_name,
                    **context,
                )
                result = await func(*args, **kwargs)
                logger.trace(
                    f"DB operation completed: {repo_name}.{func_name}",
                    operation=func_name,
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                return result

            except EntityNotFoundError as e:
                # Expected outcome for *_or_fail lookups
                logger.debug(
                    f"DB record not found: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except IntegrityError as e:
                logger.warning(
                    f"DB integrity error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except OperationalError as e:
                logger.error(
                    f"DB operational error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except (DatabaseError, SQLAlchemyError) as e:
                logger.error(
                    f"SQLAlchemy error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except Exception as e:
                logger.exception(
                    f"Unhandled exception in {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

        return wrapper

    return decorator


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Build a logging context from function kwargs.

    Only ids and simple scalar values are kept; anything that looks like a
    credential is dropped.
    """
    return {
        k: v
        for k, v in kwargs.items()
        if not k.startswith("_")
        and "password" not in k
        and isinstance(v, int | str | float | bool)
    }
