"""Configuration for the login form.

Uses gatehouse.core.Config for environment variable override support.
Environment variables use the GATEHOUSE__ prefix (e.g., GATEHOUSE__API_URL=https://auth.example.com).
"""

from typing import Optional

from pydantic import BaseModel

from gatehouse.core import Config


class LoginSettings(BaseModel):
    """Login form and credential client settings."""

    # Credential service. Empty URL selects the demo client.
    API_URL: str = ""
    LOGIN_PATH: str = "/auth/login"
    REQUEST_TIMEOUT: float = 10.0

    # Routing
    AUTHENTICATED_ROUTE: str = "/dashboard"
    LOGIN_ROUTE: str = "/login"

    # Per-browser login objects held by the UI are dropped after this many idle seconds
    CLIENT_IDLE_TIMEOUT: float = 1800.0

    # Validation
    PASSWORD_MIN_LENGTH: int = 8

    # Banner texts
    FAILURE_MESSAGE: str = "login failed, please try again later"
    EXPIRED_MESSAGE: str = "session expired, please log in again."

    @property
    def demo_mode(self) -> bool:
        return not self.API_URL


# Module-level config cache
_config: Optional[Config] = None


def get_login_config() -> Config:
    """Get the login configuration singleton.

    Configuration is loaded once and cached. Supports environment variable overrides using the GATEHOUSE__ prefix.

    Examples:
        ```bash
        export GATEHOUSE__API_URL=https://auth.example.com
        export GATEHOUSE__PASSWORD_MIN_LENGTH=10
        ```

        ```python
        config = get_login_config()
        print(config.GATEHOUSE.AUTHENTICATED_ROUTE)  # /dashboard
        ```

    Returns:
        Config instance with a GATEHOUSE section containing all settings.
    """
    global _config
    if _config is None:
        _config = Config.load(defaults={"GATEHOUSE": LoginSettings().model_dump()})
    return _config


def get_login_settings() -> LoginSettings:
    """Return the cached configuration validated back into a `LoginSettings` model."""
    return LoginSettings.model_validate(dict(get_login_config()["GATEHOUSE"]))


def reset_login_config() -> None:
    """Reset the config cache. Useful for testing."""
    global _config
    _config = None
