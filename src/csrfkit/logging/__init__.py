"""csrfkit Logging — hexagonal logging port and adapters."""

from csrfkit.logging.port import LoggingPort
from csrfkit.logging.structlog_adapter import StructlogAdapter, redact_token_values

__all__ = ["LoggingPort", "StructlogAdapter", "redact_token_values"]
