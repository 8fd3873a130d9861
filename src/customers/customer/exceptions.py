"""Exceptions raised by customer operations."""

from protean.exceptions import ValidationError


class CustomerAlreadyExists(ValidationError):
    """A customer with the same identifier or email is already registered."""
