"""Errors raised around the analysis engine.

The engine never raises for malformed-but-present data: bad amounts are
counted as zero and missing fields get defaults. Errors only come from the
edges that turn outside input into engine input:

- ``loader`` raises ValidationError for unreadable or ill-shaped documents
- ``config.load_config`` raises ConfigurationError for bad settings

The CLI catches FinpulseError, logs ``details`` and exits with status 1.
"""

from typing import Any, Optional


class FinpulseError(Exception):
    """Base class for finpulse errors.

    ``details`` is a flat mapping suitable for structured log fields.
    ``recoverable`` tells the caller whether fixing the input and retrying
    can succeed.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.recoverable = recoverable


class ValidationError(FinpulseError):
    """An input document could not be turned into transactions, targets and budgets.

    ``location`` is the dotted path of the offending value inside the
    document (``budgets.0.month``) or ``"path"`` when the file itself could
    not be read. Recoverable by default: the document can be corrected.
    """

    def __init__(
        self,
        message: str,
        *,
        location: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.location = location
        if location:
            self.details.setdefault("location", location)


class ConfigurationError(FinpulseError):
    """A FINPULSE_* setting (or an explicit override) failed validation.

    Never recoverable at runtime; the process must be restarted with
    corrected settings.
    """

    def __init__(
        self,
        message: str,
        *,
        setting: Optional[str] = None,
        value: Any = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, recoverable=False)
        self.setting = setting
        self.value = value
        if setting:
            self.details.setdefault("setting", setting)
        if value is not None:
            self.details.setdefault("value", value)


__all__ = [
    "FinpulseError",
    "ValidationError",
    "ConfigurationError",
]
