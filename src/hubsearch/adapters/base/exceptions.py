"""Adapter-specific exceptions."""

from hubsearch.core.exceptions import HubSearchError


class AdapterError(HubSearchError):
    """Base exception for adapter and store errors."""


class SourceUnavailableError(AdapterError):
    """Raised when a single entity source cannot be queried.

    The coordinator recovers from this per source; it never reaches the
    caller on its own.
    """


class ConfigurationError(AdapterError):
    """Raised when adapter or store configuration is invalid."""
