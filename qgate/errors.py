"""Exception types raised by qgate."""
from __future__ import annotations


class QGateError(Exception):
    """Base class for qgate errors."""


class ConfigError(QGateError):
    """Configuration cannot be read, is malformed or is internally inconsistent."""


class ReportError(QGateError):
    """A persisted quality report could not be read or is malformed."""


class ReportNotFoundError(ReportError):
    """The gate was invoked before any report was generated."""
