"""Syntactic checks run on the login form when it is submitted."""

import re
from typing import Optional

from gatehouse.login.types import ValidationResult

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
LETTER_PATTERN = re.compile(r"[a-zA-Z]")
DIGIT_PATTERN = re.compile(r"[0-9]")

DEFAULT_PASSWORD_MIN_LENGTH = 8

INVALID_EMAIL_MESSAGE = "invalid email format."
PASSWORD_TOO_SHORT_MESSAGE = "password must be at least {min_length} characters."
PASSWORD_COMPOSITION_MESSAGE = "password must contain both letters and digits."


class LoginValidator:
    """Validates raw login input.

    Both checks always run, so the email and password errors are independent of each other. Password rules are
    checked in order and only the first violation is reported.
    """

    def __init__(self, password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH):
        if password_min_length < 1:
            raise ValueError(f"password_min_length must be positive, got {password_min_length}")
        self.password_min_length = password_min_length

    def __call__(self, email: str, password: str) -> ValidationResult:
        return self.validate(email, password)

    def validate(self, email: str, password: str) -> ValidationResult:
        return ValidationResult(
            email_error=self.check_email(email) or "",
            password_error=self.check_password(password) or "",
        )

    @staticmethod
    def check_email(email: str) -> Optional[str]:
        """Return the error message if ``email`` is not shaped like ``local@domain.tld``, else None."""
        if EMAIL_PATTERN.fullmatch(email) is None:
            return INVALID_EMAIL_MESSAGE
        return None

    def check_password(self, password: str) -> Optional[str]:
        """Return the first password rule violation, else None.

        Length is counted in code points, so a character outside the Basic Multilingual Plane (an emoji, say) counts
        once rather than as two UTF-16 units.
        """
        if len(password) < self.password_min_length:
            return PASSWORD_TOO_SHORT_MESSAGE.format(min_length=self.password_min_length)
        if LETTER_PATTERN.search(password) is None or DIGIT_PATTERN.search(password) is None:
            return PASSWORD_COMPOSITION_MESSAGE
        return None


_default_validator = LoginValidator()


def validate(email: str, password: str) -> ValidationResult:
    """Validate login input with the default rules (8+ characters, letters and digits)."""
    return _default_validator.validate(email, password)
