"""Credential clients: exchange an email and password for a `Session`."""

import secrets
from abc import abstractmethod
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from gatehouse.core import GatehouseABC
from gatehouse.login.config import LoginSettings
from gatehouse.login.exceptions import AuthenticationError
from gatehouse.login.types import Session

DEMO_HINT = "demo account: any email / password of 8+ characters with letters and digits"


class CredentialClient(GatehouseABC):
    """Remote credential verification."""

    @abstractmethod
    async def login(self, email: str, password: str) -> Session:
        """Return a session for valid credentials.

        Raises:
            AuthenticationError: Credentials were rejected or the service could not be reached.
        """


class HttpCredentialClient(CredentialClient):
    """Posts credentials as JSON to ``{base_url}{login_path}``.

    A 2xx response must carry ``{"token": ..., "user": {...}}``. Any other status raises `AuthenticationError` with the
    decoded body as its payload, so a service message such as ``{"message": "invalid credentials"}`` reaches the user.
    """

    def __init__(
        self,
        base_url: str,
        *,
        login_path: str = "/auth/login",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")
        self.login_path = login_path if login_path.startswith("/") else f"/{login_path}"
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.login_path}"

    async def login(self, email: str, password: str) -> Session:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json={"email": email, "password": password})
        except httpx.TimeoutException as e:
            self.logger.error(f"Timeout connecting to {self.url}")
            raise AuthenticationError(f"Credential service timeout: {self.url}") from e
        except httpx.HTTPError as e:
            self.logger.error(f"Connection error to {self.url}: {e}")
            raise AuthenticationError(f"Cannot connect to credential service: {self.base_url}") from e

        body = self._decode(response)
        if response.is_error:
            self.logger.warning(f"Credential service returned {response.status_code} for {self.url}")
            raise AuthenticationError(
                f"Credential service error: {response.status_code}",
                status_code=response.status_code,
                payload=body if isinstance(body, dict) else None,
            )

        try:
            return Session.model_validate(body)
        except ValidationError as e:
            self.logger.error(f"Malformed login response from {self.url}")
            raise AuthenticationError("Malformed response from credential service.", status_code=response.status_code) from e

    @staticmethod
    def _decode(response: httpx.Response) -> Optional[Any]:
        try:
            return response.json()
        except ValueError:
            return None


class DemoCredentialClient(CredentialClient):
    """Accepts any credentials. Used when no credential service URL is configured."""

    hint = DEMO_HINT

    async def login(self, email: str, password: str) -> Session:
        self.logger.debug("Issuing demo session.")
        user: Dict[str, Any] = {"email": email, "name": email.split("@", 1)[0], "demo": True}
        return Session(token=f"demo-{secrets.token_hex(16)}", user=user)


def build_credential_client(settings: LoginSettings) -> CredentialClient:
    """HTTP client when ``API_URL`` is configured, demo client otherwise."""
    if settings.demo_mode:
        return DemoCredentialClient()
    return HttpCredentialClient(settings.API_URL, login_path=settings.LOGIN_PATH, timeout=settings.REQUEST_TIMEOUT)
