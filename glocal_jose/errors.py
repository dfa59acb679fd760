"""Errors raised while building JOSE tokens."""

from __future__ import annotations


class JoseTokenError(Exception):
    """Base exception for all token generation errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(JoseTokenError, ValueError):
    """Raised when a required configuration field is missing or blank."""

    def __init__(self, field: str, reason: str = "is required") -> None:
        super().__init__(f"{field} {reason}")
        self.field = field


class KeyFormatError(JoseTokenError, ValueError):
    """Raised when PEM key material is empty, unparseable or unusable."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class EncryptionError(JoseTokenError):
    """Raised when the JWE encryption step fails."""


class SigningError(JoseTokenError):
    """Raised when the JWS signing step fails."""


class ArgumentError(JoseTokenError, ValueError):
    """Raised when a required non-config argument is absent or unusable."""
