"""Domain-specific exceptions for inventory services."""


class InventoryServiceError(Exception):
    """Base exception for inventory services."""
    pass


class IngredientNotFoundError(InventoryServiceError):
    """Raised when ingredient does not exist."""
    pass


class InvalidRestockError(InventoryServiceError):
    """Raised when a restock amount is not a positive number."""
    pass


class MalformedRecordError(InventoryServiceError):
    """Raised when a stored measurement or ingredient record cannot be decoded."""
    pass
