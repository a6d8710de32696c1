"""csrfkit Kernel — Foundation layer with zero external dependencies."""

from csrfkit.kernel.exceptions import (
    ConfigurationException,
    CsrfConfigurationException,
    CsrfKitException,
    InvalidCsrfTokenException,
    SecurityException,
)
from csrfkit.kernel.types import (
    ErrorCategory,
    ErrorResponse,
    ErrorSeverity,
)

__all__ = [
    # Types
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorResponse",
    # Base
    "CsrfKitException",
    # Security
    "SecurityException",
    "InvalidCsrfTokenException",
    # Configuration
    "ConfigurationException",
    "CsrfConfigurationException",
]
