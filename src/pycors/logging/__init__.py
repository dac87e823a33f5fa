"""pycors logging — logging port and structlog adapter."""

from pycors.logging.port import LoggingPort
from pycors.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
