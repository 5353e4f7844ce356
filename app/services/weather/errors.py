"""Errors raised while fetching and normalizing upstream weather and flood payloads.

An alignment miss is not an error: the resolver returns ``None`` and the
normalizer falls back to unknown/zero field values instead of failing.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for failures that abort a single location's processing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoCurrentDataError(WeatherError):
    """The provider payload has no instantaneous-reading section."""

    def __init__(self, message: str = "Invalid weather data received: no current conditions") -> None:
        super().__init__(message)


class TransportError(WeatherError):
    """The request to the provider failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(WeatherError):
    """The provider answered but the body could not be interpreted."""
