"""
This module defines the exceptions that can be raised by stack operations.
"""


class Error(Exception):
    """
    Base class for all other errors in this module.
    """


class ValidationError(Error, ValueError):
    """
    Raised when an options object is missing a required field or has conflicting
    fields. Always raised before any request is made.
    """

    def __init__(self, field, reason):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class TransportError(Error, RuntimeError):
    """
    Raised when the underlying HTTP request could not be completed.
    """


class UnexpectedStatusError(Error, RuntimeError):
    """
    Raised when a response has a status code that the operation does not accept.
    """

    def __init__(self, status_code, body, message=None):
        self.status_code = status_code
        self.body = body
        super().__init__(
            message or f"Unexpected status code {status_code}"
        )


class DecodeError(Error, ValueError):
    """
    Raised when a response body cannot be decoded.
    """


class ConfigurationError(Error, RuntimeError):
    """
    Raised when the cloud configuration cannot be found or is invalid.
    """
