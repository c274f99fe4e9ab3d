"""
Custom exceptions for the scheduling engine.
"""


class SchedulerError(Exception):
    """Base exception for all scheduling engine errors."""
    pass


class InvalidCardError(SchedulerError, ValueError):
    """Raised when a card violates the data model (bad progress, missing timestamps)."""
    pass


class UnknownModeError(SchedulerError, KeyError):
    """Raised when a display mode name is not in the configuration."""

    def __str__(self):
        return str(self.args[0]) if self.args else "Unknown display mode"


class ConfigurationError(SchedulerError, ValueError):
    """Raised when a configuration or overlay is inconsistent."""
    pass


class CardNotFoundError(SchedulerError, LookupError):
    """Raised when a repository has no card with the requested id."""
    pass


class DuplicateCardError(SchedulerError):
    """Raised when a card with the same term or translation already exists."""

    def __init__(self, message: str, existing=None):
        super().__init__(message)
        self.existing = existing


class SessionStateError(SchedulerError, RuntimeError):
    """Raised when a review session is used out of order."""
    pass
