"""Exception hierarchy for pycors.

All package exceptions inherit from PyCorsException so callers can catch a
single base type during application bootstrap.

Categories:
- ConfigurationException: invalid or conflicting configuration, raised at startup
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyCorsException(Exception):
    """Base exception for all pycors errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFLICT").
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
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PyCorsException):
    """Configuration is invalid; the application must not start with it."""


class InvalidCORSConfigurationException(ConfigurationException):
    """A CORS policy was built from a conflicting or out-of-range configuration."""
