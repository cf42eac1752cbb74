"""Load-time error types shared by the dex and the format catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorDetails:
    """Machine-readable summary of a configuration defect."""

    code: str
    message: str
    format_id: Optional[str] = None


class ConfigurationError(Exception):
    """Base class for load-time configuration defects.

    Configuration errors are fatal for the definition that caused them.
    Legality problems found while validating a team are *not* exceptions;
    they are returned to the caller as plain messages.
    """

    error_code = "ERR_CONFIGURATION"

    def __init__(
        self,
        message: str,
        *,
        format_id: Optional[str] = None,
        details: Optional[ErrorDetails] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails(code=self.error_code, message=message, format_id=format_id)

    @property
    def code(self) -> str:
        return self.details.code

    @property
    def format_id(self) -> Optional[str]:
        return self.details.format_id

    def describe(self) -> str:
        """One-line ``[CODE] message`` form used in operator output."""

        return f"[{self.code}] {self.details.message}"


__all__ = ["ConfigurationError", "ErrorDetails"]
