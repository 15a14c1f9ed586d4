from typing import Any, Mapping, Optional


def payload_message(payload: Any) -> Optional[str]:
    """Return ``payload["message"]`` when it is a non-blank string, else None."""
    if not isinstance(payload, Mapping):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


class GatehouseLoginError(Exception):
    """Base exception for the login package."""


class AuthenticationError(GatehouseLoginError):
    """Raised when the credential service rejects a login or cannot be reached.

    ``payload`` holds the decoded failure body, if the service returned one. A human-readable message for the user is
    expected at ``payload["message"]``.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def display_message(self) -> Optional[str]:
        return payload_message(self.payload)


class SessionNotAuthenticatedError(GatehouseLoginError):
    """Raised when session data is requested from an unauthenticated session store."""
