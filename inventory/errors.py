# inventory/errors.py


class InventoryError(Exception):
    """Base class for inventory store errors."""


class NullInputError(InventoryError, ValueError):
    """A required argument was None."""


class ValidationError(InventoryError, ValueError):
    """A product violates a business rule (empty name, negative quantity or price)."""


class NotFoundError(InventoryError, LookupError):
    """No product with the requested id exists."""


class CorruptStoreError(InventoryError):
    """The backing file exists but could not be read or parsed."""
