"""Decorators for TUI components."""

from functools import wraps

from batlights.exceptions import handle_errors as _handle_errors


def handle_action_errors(operation_name: str):
    """
    Decorator for TUI action methods that wraps the centralized error handler.

    Errors are logged and shown as a notification, and the action returns
    None so the TUI stays responsive.

    Example:
        @handle_action_errors("send command")
        def action_input(self, name: str):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            handler = _handle_errors(
                operation_name=operation_name,
                user_notification=lambda msg: self.notify(msg, severity="error", timeout=5),
                re_raise=False,
                fallback_value=None
            )
            return handler(func)(self, *args, **kwargs)
        return wrapper
    return decorator
