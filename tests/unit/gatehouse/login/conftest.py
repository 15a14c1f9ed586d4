"""Fakes and fixtures shared by the login form tests."""

import asyncio
from typing import Any, List, Optional, Tuple

import pytest

from gatehouse.login import (
    AuthenticationError,
    CredentialClient,
    LoginForm,
    LoginSettings,
    RecordingNavigator,
    Session,
    SessionStore,
    reset_login_config,
)

VALID_EMAIL = "ada@example.com"
VALID_PASSWORD = "analytical1"


class ControlledAuthenticator:
    """Authenticator whose calls stay pending until the test resolves or rejects them."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []
        self._pending: List[asyncio.Future] = []

    async def authenticate(self, email: str, password: str) -> Any:
        self.calls.append((email, password))
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, value: Any = None) -> None:
        self._pending.pop(0).set_result(value)

    def reject(self, error: BaseException) -> None:
        self._pending.pop(0).set_exception(error)


class ControlledClient(CredentialClient):
    """Credential client with the same pending-call control, for driving a real `SessionStore`."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[str, str]] = []
        self._pending: List[asyncio.Future] = []

    async def login(self, email: str, password: str) -> Session:
        self.calls.append((email, password))
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def accept(self, token: str = "token-1", user: Optional[dict] = None) -> None:
        self._pending.pop(0).set_result(Session(token=token, user=user or {"email": "ada@example.com"}))

    def refuse(self, message: Optional[str] = None, status_code: int = 401) -> None:
        payload = {"message": message} if message is not None else None
        self._pending.pop(0).set_exception(
            AuthenticationError("rejected", status_code=status_code, payload=payload)
        )


async def _settle() -> None:
    """Let pending tasks run until they block again."""
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def reset_config():
    reset_login_config()
    yield
    reset_login_config()


@pytest.fixture
def settings() -> LoginSettings:
    return LoginSettings()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator(start="/login")


@pytest.fixture
def client() -> ControlledClient:
    return ControlledClient()


@pytest.fixture
def store(client: ControlledClient) -> SessionStore:
    return SessionStore(client)


@pytest.fixture
def form(store: SessionStore, navigator: RecordingNavigator, settings: LoginSettings) -> LoginForm:
    login_form = LoginForm(store, store, navigator, settings=settings)
    login_form.mount()
    yield login_form
    login_form.unmount()


@pytest.fixture
def authenticator() -> ControlledAuthenticator:
    return ControlledAuthenticator()


@pytest.fixture
def settle():
    return _settle


@pytest.fixture
def fill():
    def _fill(form: LoginForm, email: str = VALID_EMAIL, password: str = VALID_PASSWORD) -> None:
        form.set_email(email)
        form.set_password(password)

    return _fill
