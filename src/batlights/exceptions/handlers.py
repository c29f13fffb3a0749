"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
┌─────────────────────────────────────┐
│  USER LAYER (CLI/TUI)               │
│  - Formats error.user_message       │
│  - Shows error.recovery_hint        │
└─────────────────────────────────────┘
                  ↑ BatLightsError
┌─────────────────────────────────────┐
│  TRANSPORT / PIPELINE               │
│  - Converts bleak errors            │
│  - Contains write/teardown failures │
└─────────────────────────────────────┘
                  ↑ BleakError, OSError, etc.
┌─────────────────────────────────────┐
│  LOW LEVEL (bleak, BlueZ, WinRT)    │
└─────────────────────────────────────┘
```

## Quick Reference

| Scenario | Use This |
|----------|----------|
| bleak raised while connecting | `raise wrap_ble_error(e, address, characteristic) from e` |
| pydantic rejected the config file | `raise wrap_pydantic_error(e, str(path)) from e` |
| Show an error to the user | `message, hint = format_error_for_display(e)` |
| Critical section with auto-logging | `with ErrorContext("connect"): ...` |
| Log, notify, keep going | `@handle_errors(operation_name="send", re_raise=False)` |
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from bleak.exc import BleakBluetoothNotAvailableError

from .acquisition import (
    AcquisitionError,
    AdapterNotFoundError,
    CharacteristicNotFoundError,
    PeripheralConnectionError,
    PeripheralNotFoundError,
)
from .base import BatLightsError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "send frame")
        user_notification: Optional callback to notify user (e.g., self.notify)
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except BatLightsError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(
                    log_level,
                    f"Unexpected error during {operation_name}: {e}",
                    exc_info=True
                )

                if user_notification:
                    user_notification(f"Error: {e}")

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("connect to lights", logger_instance=logger):
            connection = transport.connect()
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and log any exception.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, BatLightsError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def wrap_ble_error(
    error: Exception,
    address: str,
    characteristic: Optional[str] = None,
) -> AcquisitionError:
    """
    Convert low-level Bluetooth errors raised while connecting to acquisition errors.

    bleak reports most failures as BleakError with a backend-specific message,
    so the classification is based on the message text.

    Args:
        error: The original exception from bleak or the OS
        address: Address of the peripheral being acquired
        characteristic: UUID of the write characteristic (if known)

    Returns:
        An AcquisitionError with appropriate type and message
    """
    if isinstance(error, AcquisitionError):
        return error

    error_msg = str(error)
    lowered = error_msg.lower()

    if isinstance(error, BleakBluetoothNotAvailableError):
        return AdapterNotFoundError(original_error=error_msg)

    if "adapter" in lowered or "bluetooth not available" in lowered or "powered off" in lowered:
        return AdapterNotFoundError(original_error=error_msg)

    if "not found" in lowered and "characteristic" in lowered and characteristic:
        return CharacteristicNotFoundError(address, characteristic)

    if "not found" in lowered or "was not found" in lowered:
        return PeripheralNotFoundError(address)

    return PeripheralConnectionError(address, original_error=error_msg)


def wrap_pydantic_error(error: Exception, file_path: str) -> BatLightsError:
    """
    Convert Pydantic validation errors to BatLights exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, BatLightsError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
