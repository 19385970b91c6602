"""Typed exceptions for loading, validating and rendering authorizations."""


class AutorisationError(Exception):
    """Base class for all package errors."""


class LoadError(AutorisationError):
    """Raised when an input file cannot be read or parsed into a request."""


class ConfigError(AutorisationError):
    """Raised when a configuration file cannot be read or parsed."""


class ValidationError(AutorisationError, ValueError):
    """Base class for business rule violations found by the validator."""


class InvalidChildName(ValidationError):
    """Raised when the child's last name is blank or longer than 80 characters."""


class InvalidDate(ValidationError):
    """Raised when the date is not a real ``DD/MM/YYYY`` calendar date."""


class InvalidPlace(ValidationError):
    """Raised when the place is blank or longer than 80 characters."""


class InvalidPhone(ValidationError):
    """Raised when the guardian phone cannot be normalized or is too short."""


class RenderError(AutorisationError):
    """Raised when no rendering backend could produce the document."""


class OutputPathError(AutorisationError):
    """Raised when an output path cannot receive a file."""


__all__ = [
    "AutorisationError",
    "LoadError",
    "ConfigError",
    "ValidationError",
    "InvalidChildName",
    "InvalidDate",
    "InvalidPlace",
    "InvalidPhone",
    "RenderError",
    "OutputPathError",
]
