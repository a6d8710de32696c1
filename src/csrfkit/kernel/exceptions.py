"""Unified exception hierarchy for csrfkit.

All library exceptions inherit from CsrfKitException, enabling unified
error handling across modules.

Categories:
- SecurityException: Token validation failures
- ConfigurationException: Missing or invalid host integration/configuration
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CsrfKitException(Exception):
    """Base exception for all csrfkit errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_TOKEN_INVALID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(CsrfKitException):
    """Request authenticity and authorization errors."""


class InvalidCsrfTokenException(SecurityException):
    """The request carried no anti-forgery token, or one that did not validate."""

    def __init__(
        self,
        message: str = "Request token was invalid",
        code: str | None = "CSRF_TOKEN_INVALID",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code, context)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(CsrfKitException):
    """Invalid configuration or missing host integration."""


class CsrfConfigurationException(ConfigurationException):
    """The CSRF handler cannot operate with the collaborators it was given."""
