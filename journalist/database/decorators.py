#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for storage operations.

    log_database_operation  timing + operation id, routed to the logger
    handle_db_errors        SQLAlchemy / OS errors -> StorageError

Both expect to decorate methods of an object with an optional `logger`
attribute.
"""
from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from journalist.core.exceptions import StorageError
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import Entry


def describe_call(operation: str, args: Tuple[Any, ...]) -> str:
    """
    Render an operation and its arguments for error messages.

    Entries are shown by date and ranges as start..end, so that a failure
    names the date or range it concerned.

    Examples:
        >>> describe_call("save_entry", (Entry(date(2024, 3, 15)),))
        'save_entry(2024-03-15)'
    """
    parts = []
    for arg in args:
        if isinstance(arg, Entry):
            parts.append(arg.date.isoformat())
        elif isinstance(arg, (date, DateRange)):
            parts.append(str(arg))
        else:
            parts.append(repr(arg))
    return f"{operation}({', '.join(parts)})"


def log_database_operation(operation_name: str):
    """
    Decorator to log storage operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"
            logger = getattr(self, "logger", None)

            if logger:
                logger.log_debug(
                    f"Starting {operation_name}",
                    {
                        "operation_id": operation_id,
                        "call": describe_call(operation_name, args),
                    },
                )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                if logger:
                    logger.log_error(
                        e,
                        {
                            "operation": operation_name,
                            "operation_id": operation_id,
                            "duration_seconds": duration,
                        },
                    )
                raise

            duration = (datetime.now() - start_time).total_seconds()
            if logger:
                logger.log_operation(
                    f"{operation_name}_completed",
                    {
                        "operation_id": operation_id,
                        "duration_seconds": duration,
                        "success": True,
                    },
                )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to convert backend failures into StorageError.

    The message names the operation and its date/range arguments.
    StorageError raised inside the function passes through unchanged.

    Args:
        function: Method to wrap

    Returns:
        Wrapped method with error handling
    """

    @wraps(function)
    def wrapper(self, *args, **kwargs):
        try:
            return function(self, *args, **kwargs)
        except StorageError:
            raise
        except IntegrityError as e:
            call = describe_call(function.__name__, args)
            raise StorageError(f"{call} failed: data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            call = describe_call(function.__name__, args)
            raise StorageError(f"{call} failed: database operation failed: {e}") from e
        except OSError as e:
            call = describe_call(function.__name__, args)
            raise StorageError(f"{call} failed: {e}") from e

    return wrapper
