"""
Exception types raised by the Jobber transport, resource operations and node.
"""
from typing import Any, Dict, List, Optional


class JobberError(Exception):
    """Base class for every error raised by this package."""


class ApiError(JobberError):
    """The Jobber API call failed, either at the HTTP level or with GraphQL errors."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.errors: List[Dict[str, Any]] = errors or []
        self.cause = cause
        self.status_code = status_code

    @classmethod
    def from_graphql_errors(cls, errors: List[Dict[str, Any]]) -> "ApiError":
        messages = [str(e.get("message", "Unknown GraphQL error")) for e in errors]
        return cls(f"Jobber API Error: {', '.join(messages)}", errors=errors)


class NotFoundError(ApiError):
    """A lookup by id returned a null node."""


class DomainValidationError(JobberError):
    """A mutation went through but Jobber answered with userErrors."""

    def __init__(self, message: str, user_errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.user_errors: List[Dict[str, Any]] = user_errors or []


class UnsupportedOperation(JobberError):
    """Unknown resource or operation key."""


class ReadOnlyModeError(UnsupportedOperation):
    """A write operation was requested while read-only mode is on."""


class InvalidInput(JobberError):
    """Caller supplied parameters that cannot be turned into a request."""


class MissingTokenError(ApiError):
    """No usable access token; the request was never sent."""
