"""Error types and user-safe error messages."""

import functools
import traceback
from typing import Optional


class TripMindError(Exception):
    """Base error carrying the HTTP status it should be answered with."""

    status = 500

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(TripMindError):
    status = 400

    def __init__(self, message: str, details: Optional[list] = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class AuthenticationError(TripMindError):
    status = 401


class NotFoundError(TripMindError):
    status = 404


class GatewayError(TripMindError):
    """An upstream service (AI gateway, advisory API) failed."""


# Ordered: first matching group wins
_SAFE_MESSAGES = [
    (("jwt", "token", "session"), "Your session has expired. Please sign in again."),
    (("row-level security", "permission denied"), "You do not have permission to perform this action."),
    (("violates", "constraint"), "The provided data is invalid. Please check your input."),
    (("network", "fetch", "connection"), "Unable to connect. Please check your internet connection."),
    (("rate limit", "too many requests"), "Too many requests. Please wait a moment and try again."),
    (("not found", "does not exist"), "The requested resource could not be found."),
    (("authentication", "unauthorized"), "Please sign in to continue."),
]

DEFAULT_SAFE_MESSAGE = "An error occurred. Please try again later."


def get_safe_error_message(error: BaseException, context: Optional[str] = None) -> str:
    """Log the raw error and return a message that is safe to show users."""
    print(f"[{context or 'ERROR'}] {type(error).__name__}: {error}")

    message = str(error).lower()
    for keywords, safe_message in _SAFE_MESSAGES:
        if any(keyword in message for keyword in keywords):
            return safe_message
    return DEFAULT_SAFE_MESSAGE


def handles_errors(context: str):
    """Turn errors raised by a request handler into ``(payload, status)`` tuples."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except TripMindError as e:
                print(f"[{context}] {type(e).__name__} ({e.status}): {e.message}")
                return e.to_dict(), e.status
            except Exception as e:
                traceback.print_exc()
                return {"error": get_safe_error_message(e, context)}, 500
        return wrapper
    return decorator
