"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class URLValidationError(URLError):
    """URL failed validation checks."""
    pass


class InvalidURLError(URLValidationError):
    """The URL is not a well-formed absolute URL."""
    pass


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class CollisionExhaustedError(URLCreationError):
    """No free short code was found within the retry bound."""
    pass


class URLNotFoundError(URLError):
    """URL with the specified short code was not found."""
    pass


class StoreUnavailableError(ServiceError):
    """The mapping store failed or did not answer in time."""
    pass
