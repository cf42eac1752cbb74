"""Custom exceptions raised while registering and resolving formats."""

from __future__ import annotations

from typing import Sequence

from core.errors import ConfigurationError


class RulesetError(ConfigurationError):
    """Raised when a format's ruleset graph cannot be resolved."""

    error_code = "ERR_RULESET"


class FormatNotFoundError(RulesetError):
    """Raised when a requested format identifier is not registered."""

    error_code = "ERR_FORMAT_NOT_FOUND"

    def __init__(self, format_id: str) -> None:
        super().__init__(f"Format '{format_id}' not found", format_id=format_id)


class RulesetCycleError(RulesetError):
    """Raised when resolution revisits a format that is still being expanded."""

    error_code = "ERR_RULESET_CYCLE"

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__("Ruleset cycle detected: " + " -> ".join(path))
        self.path = tuple(path)


class InvalidRuleReferenceError(RulesetError):
    """Raised when a ruleset or banlist entry cannot be classified."""

    error_code = "ERR_INVALID_RULE_REF"

    def __init__(self, format_id: str, entry: str, reason: str) -> None:
        super().__init__(f"Format '{format_id}' has an invalid entry {entry!r}: {reason}", format_id=format_id)
        self.entry = entry


class DuplicateFormatError(ConfigurationError):
    """Raised when two definitions normalise to the same identifier."""

    error_code = "ERR_DUPLICATE_FORMAT"

    def __init__(self, format_id: str) -> None:
        super().__init__(f"Format '{format_id}' is defined more than once", format_id=format_id)


class FormatSchemaError(ConfigurationError):
    """Raised when a format payload fails schema validation."""

    error_code = "ERR_FORMAT_SCHEMA"


__all__ = [
    "DuplicateFormatError",
    "FormatNotFoundError",
    "FormatSchemaError",
    "InvalidRuleReferenceError",
    "RulesetCycleError",
    "RulesetError",
]
