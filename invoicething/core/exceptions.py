# invoicething/core/exceptions.py
"""Custom exceptions for InvoiceThing."""


class InvoiceThingError(Exception):
    """Base exception for the application."""

    pass


class InvalidArgumentError(InvoiceThingError):
    """Raised when an input value is outside its accepted domain."""

    pass


class NotFoundError(InvoiceThingError):
    """Raised when an entity does not exist for the acting user."""

    pass


class AuthenticationError(InvoiceThingError):
    """Raised when no acting user can be resolved."""

    pass


class ConfigurationError(InvoiceThingError):
    """Raised when configuration is invalid."""

    pass
