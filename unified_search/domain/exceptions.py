"""Domain exceptions for unified search.

Defines the exception hierarchy shared by the application and
infrastructure layers. Components that talk to the UI convert these into
local state (error status, inline validation messages) at their boundary.
"""

from typing import Any


class UnifiedSearchException(Exception):
    """Base exception for all unified search errors.

    All custom exceptions inherit from this class so callers can handle
    them uniformly and build error state from message, error_code and
    details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, status_code).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(UnifiedSearchException):
    """Raised when local input validation fails (e.g. saving an empty query)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(UnifiedSearchException):
    """Raised when the caller is not signed in or the API rejects credentials."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class SavedSearchNotFoundException(UnifiedSearchException):
    """Raised when a saved search id does not exist for the current user."""

    def __init__(self, saved_search_id: str) -> None:
        """Initialize with the missing saved search identifier.

        Args:
            saved_search_id: The id that was not found.
        """
        super().__init__(
            f"Saved search not found: {saved_search_id}",
            "SAVED_SEARCH_NOT_FOUND",
            {"saved_search_id": saved_search_id},
        )


class SearchRequestError(UnifiedSearchException):
    """Raised when a search or suggestion request fails (network or HTTP error)."""

    def __init__(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize with the failed operation and reason.

        Args:
            operation: 'search' or 'suggestions'.
            reason: Human-readable cause (transport error or response text).
            status_code: HTTP status when the server answered.
        """
        details: dict[str, Any] = {"operation": operation, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(f"{operation} request failed: {reason}", "SEARCH_REQUEST_FAILED", details)

    @property
    def retryable(self) -> bool:
        """False for client errors (4xx) that a plain retry cannot fix."""
        status_code = self.details.get("status_code")
        return status_code is None or status_code >= 500 or status_code == 429


class SavedSearchStoreError(UnifiedSearchException):
    """Raised when the saved search store fails (network or HTTP error)."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(
            f"Failed to {action} saved search: {reason}",
            "SAVED_SEARCH_STORE_ERROR",
            {"action": action, "reason": reason},
        )
