from gatehouse.login.clients import (
    CredentialClient,
    DemoCredentialClient,
    HttpCredentialClient,
    build_credential_client,
)
from gatehouse.login.config import LoginSettings, get_login_config, get_login_settings, reset_login_config
from gatehouse.login.controller import SubmissionController, extract_failure_message
from gatehouse.login.exceptions import AuthenticationError, GatehouseLoginError, SessionNotAuthenticatedError
from gatehouse.login.form import LoginForm, LoginFormView
from gatehouse.login.navigation import RecordingNavigator
from gatehouse.login.session import SessionStore
from gatehouse.login.types import (
    FormInput,
    Navigator,
    Session,
    SessionSignal,
    SubmissionOutcome,
    SubmissionState,
    SubmissionStatus,
    ValidationResult,
)
from gatehouse.login.validator import LoginValidator, validate
from gatehouse.login.watcher import SessionWatcher


def create_session_store(settings: LoginSettings | None = None) -> SessionStore:
    """Build a session store backed by the configured credential client."""
    settings = settings or get_login_settings()
    return SessionStore(build_credential_client(settings), default_expired_message=settings.EXPIRED_MESSAGE)


def create_login_form(
    session: SessionStore, navigator: Navigator, *, settings: LoginSettings | None = None
) -> LoginForm:
    """Build a login form that authenticates through ``session`` and shows the demo hint in demo mode."""
    settings = settings or get_login_settings()
    hint = DemoCredentialClient.hint if isinstance(session.client, DemoCredentialClient) else ""
    return LoginForm(session, session, navigator, settings=settings, demo_hint=hint)


__all__ = [
    "AuthenticationError",
    "build_credential_client",
    "create_login_form",
    "create_session_store",
    "CredentialClient",
    "DemoCredentialClient",
    "extract_failure_message",
    "FormInput",
    "GatehouseLoginError",
    "get_login_config",
    "get_login_settings",
    "HttpCredentialClient",
    "LoginForm",
    "LoginFormView",
    "LoginSettings",
    "LoginValidator",
    "Navigator",
    "RecordingNavigator",
    "reset_login_config",
    "Session",
    "SessionNotAuthenticatedError",
    "SessionSignal",
    "SessionStore",
    "SessionWatcher",
    "SubmissionController",
    "SubmissionOutcome",
    "SubmissionState",
    "SubmissionStatus",
    "validate",
    "ValidationResult",
]
