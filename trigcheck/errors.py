"""Custom exceptions for trigcheck."""

from __future__ import annotations


class TrigcheckError(RuntimeError):
    """Raised when a check run cannot be set up or completed."""


class ConfigError(TrigcheckError):
    """Raised for configuration values the checker cannot work with."""


class OracleStartError(TrigcheckError):
    """Raised when the FriCAS oracle cannot be spawned or does not finish its handshake."""

    error_code = "TC_ORACLE_START"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.error_code}: {message}")
