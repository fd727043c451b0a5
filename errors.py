"""Exceptions raised by the bandit core."""


class BanditError(Exception):
    """Base class for every error raised by the bandit modules."""


class ConfigurationError(BanditError, ValueError):
    """Bad construction or training input (empty pool, epsilon, steps...)."""


class AlreadyTrackingError(BanditError):
    """History tracking was enabled while it was already on."""


class NoHistoryError(BanditError):
    """History was requested but tracking is off."""
