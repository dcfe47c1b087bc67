"""
Galaksion API - Error types
"""


class GalaksionError(Exception):
    """Base error for everything raised by the Galaksion client."""


class AuthError(GalaksionError):
    """Credential rejected or auth response malformed."""


class TransportError(GalaksionError):
    """Network failure or an undecodable response body."""


class ApiError(GalaksionError):
    """Decoded body reports an error (`error`, `errors` or `success: false`)."""

    def __init__(self, message: str, body=None):
        self.body = body
        super().__init__(message)


class ExpiryError(ApiError):
    """Decoded body carries the credential-expiry code."""


class ValidationError(GalaksionError):
    """Expected fields are missing or cannot be parsed."""
