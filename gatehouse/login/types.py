"""Data types shared by the login form components."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@dataclass
class FormInput:
    """Raw values typed into the form. Changed only by direct user edits; never validated while typing."""

    email: str = ""
    password: str = ""
    password_visible: bool = False

    def toggle_password_visibility(self) -> None:
        self.password_visible = not self.password_visible

    @property
    def password_input_type(self) -> str:
        return "text" if self.password_visible else "password"

    def reset(self) -> None:
        self.email = ""
        self.password = ""
        self.password_visible = False


class ValidationResult(BaseModel):
    """Per-field validation messages. An empty string means the field passed."""

    model_config = ConfigDict(frozen=True)

    email_error: str = ""
    password_error: str = ""

    @property
    def is_valid(self) -> bool:
        return not self.email_error and not self.password_error

    @property
    def invalid_fields(self) -> list[str]:
        return [name for name, error in (("email", self.email_error), ("password", self.password_error)) if error]


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    # Authenticator resolved; waiting for the session watcher to navigate away
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionState:
    status: SubmissionStatus = SubmissionStatus.IDLE
    message: str = ""

    @classmethod
    def idle(cls) -> "SubmissionState":
        return cls(SubmissionStatus.IDLE)

    @classmethod
    def validating(cls) -> "SubmissionState":
        return cls(SubmissionStatus.VALIDATING)

    @classmethod
    def submitting(cls) -> "SubmissionState":
        return cls(SubmissionStatus.SUBMITTING)

    @classmethod
    def succeeded(cls) -> "SubmissionState":
        return cls(SubmissionStatus.SUCCEEDED)

    @classmethod
    def failed(cls, message: str) -> "SubmissionState":
        return cls(SubmissionStatus.FAILED, message)

    @property
    def locked(self) -> bool:
        """Whether inputs and the submit control are disabled."""
        return self.status in (SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCEEDED)


class SubmissionOutcome(str, Enum):
    """Result of one submit attempt."""

    INVALID = "invalid"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"
    IGNORED = "ignored"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class SessionSignal:
    """Externally owned session status as seen by the form."""

    is_authenticated: bool = False
    expired_message: str = ""


class Session(BaseModel):
    token: str
    user: Optional[Dict[str, Any]] = None


@runtime_checkable
class Authenticator(Protocol):
    async def authenticate(self, email: str, password: str) -> Any: ...


@runtime_checkable
class SessionProvider(Protocol):
    """Push-model session source: current signal, change subscription, one-shot expiry acknowledgment."""

    @property
    def signal(self) -> SessionSignal: ...

    def subscribe(self, event_name: str, handler: Callable) -> str: ...

    def unsubscribe(self, event_name: str, handler_or_id: str | Callable) -> None: ...

    def acknowledge_expired(self) -> None: ...


@runtime_checkable
class Navigator(Protocol):
    def go_to(self, destination: str, *, replace_history: bool = False) -> None: ...
