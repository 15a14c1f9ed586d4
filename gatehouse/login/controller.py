"""Submission state machine for the login form.

idle -> validating -> (idle: invalid input) | submitting -> succeeded | failed

The controller never navigates. After a successful call it stays locked until the session watcher observes the
session flip and moves the user away.
"""

from typing import Callable, Optional, Tuple

from gatehouse.core import Gatehouse
from gatehouse.login.exceptions import AuthenticationError, payload_message
from gatehouse.login.types import (
    Authenticator,
    FormInput,
    SubmissionOutcome,
    SubmissionState,
    SubmissionStatus,
    ValidationResult,
)
from gatehouse.login.validator import validate as default_validate

DEFAULT_FAILURE_MESSAGE = "login failed, please try again later"


def extract_failure_message(error: BaseException, fallback: str = DEFAULT_FAILURE_MESSAGE) -> str:
    """Return the human-readable message carried by a failed login, or ``fallback``.

    The message is read from ``error.payload["message"]``. Errors without a payload but with an HTTP ``response`` are
    read from the response's JSON body instead.
    """
    payload = getattr(error, "payload", None)
    if payload is None:
        response = getattr(error, "response", None)
        read_json = getattr(response, "json", None)
        if callable(read_json):
            try:
                payload = read_json()
            except ValueError:
                payload = None
    return payload_message(payload) or fallback


class SubmissionController(Gatehouse):
    """Drives one form instance from a submit click to an authenticated session or a displayable error.

    Args:
        authenticator: Object with an async ``authenticate(email, password)`` method.
        validator: Callable ``(email, password) -> ValidationResult``.
        fallback_message: Banner text used when a failure carries no message.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        validator: Optional[Callable[[str, str], ValidationResult]] = None,
        fallback_message: str = DEFAULT_FAILURE_MESSAGE,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.authenticator = authenticator
        self.validator = validator or default_validate
        self.fallback_message = fallback_message
        self.state = SubmissionState.idle()
        self.validation = ValidationResult()
        self.banner = ""
        self._alive = True
        self._pending: Optional[Tuple[str, str]] = None

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def locked(self) -> bool:
        return self.state.locked

    def begin(self, form: FormInput) -> Optional[SubmissionOutcome]:
        """Run the synchronous part of a submit attempt.

        Clears the banner, validates and, if the input is valid, enters ``submitting``. Returns the final outcome when
        no authenticator call is needed, or None when `complete` must be awaited.
        """
        if not self._alive:
            return SubmissionOutcome.ABANDONED
        if self.state.locked:
            self.logger.warning(f"Submit ignored while {self.state.status.value}.")
            return SubmissionOutcome.IGNORED

        self.banner = ""
        self._transition(SubmissionState.validating())
        self.validation = self.validator(form.email, form.password)
        if not self.validation.is_valid:
            self.logger.info(f"Login rejected by validation: {', '.join(self.validation.invalid_fields)}.")
            self._transition(SubmissionState.idle())
            return SubmissionOutcome.INVALID

        self._pending = (form.email, form.password)
        self._transition(SubmissionState.submitting())
        return None

    async def complete(self) -> SubmissionOutcome:
        """Await the authenticator for the attempt started by `begin`."""
        if self.state.status is not SubmissionStatus.SUBMITTING or self._pending is None:
            raise RuntimeError(f"No submission in progress (state: {self.state.status.value}).")
        email, password = self._pending
        self._pending = None

        try:
            await self.authenticator.authenticate(email, password)
        except Exception as e:
            if not self._alive:
                self.logger.debug(f"Discarding late login failure for a torn-down form: {e}")
                return SubmissionOutcome.ABANDONED
            self._fail(e)
            return SubmissionOutcome.FAILED

        if not self._alive:
            self.logger.debug("Discarding late login success for a torn-down form.")
            return SubmissionOutcome.ABANDONED
        self.logger.info("Login accepted; waiting for the session to become authenticated.")
        self._transition(SubmissionState.succeeded())
        return SubmissionOutcome.AUTHENTICATED

    async def submit(self, form: FormInput) -> SubmissionOutcome:
        outcome = self.begin(form)
        if outcome is not None:
            return outcome
        return await self.complete()

    def show_banner(self, message: str) -> None:
        self.banner = message

    def dismiss_banner(self) -> None:
        self.banner = ""

    def dispose(self) -> None:
        """Mark this instance as torn down. Late authenticator results are discarded from now on."""
        self._alive = False
        self._pending = None

    def _fail(self, error: Exception) -> None:
        message = extract_failure_message(error, self.fallback_message)
        if isinstance(error, AuthenticationError):
            self.logger.warning(f"Login failed: {message}")
        else:
            self.logger.exception(f"Authenticator raised an unexpected {type(error).__name__}.")
        self.banner = message
        self._transition(SubmissionState.failed(message))

    def _transition(self, new_state: SubmissionState) -> None:
        self.logger.debug(f"Submission state {self.state.status.value} -> {new_state.status.value}.")
        self.state = new_state

    def __repr__(self) -> str:
        return f"{self.name}(state={self.state.status.value!r}, banner={self.banner!r})"
