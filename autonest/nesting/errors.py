"""Exceptions raised by the nesting package."""


class NestingError(Exception):
    """Base nesting error."""
    pass


class ConfigurationError(NestingError, ValueError):
    """Raised when a nesting configuration would produce meaningless geometry."""
    pass


class InvalidItemError(NestingError, ValueError):
    """Raised when an item mapping cannot be turned into an Item."""
    pass
