from __future__ import annotations


class MugloarError(Exception):
    pass


class ApiClientError(MugloarError):
    """Transport or parse failure talking to the game API."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class SessionStalledError(MugloarError):
    pass


class UnknownCipherError(ValueError):
    pass
