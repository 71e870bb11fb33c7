"""Domain-specific exceptions for order services."""


class OrderServiceError(Exception):
    """Base exception for order services."""
    pass


class OrderValidationFailed(OrderServiceError):
    """
    Raised when a draft order fails validation.

    ``errors`` holds every OrderValidationIssue found, not just the first.
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(issue.message for issue in self.errors) or 'Order is invalid.')


class InsufficientStockError(OrderServiceError):
    """Raised when an ingredient cannot cover what the order requires."""

    def __init__(self, ingredient_name, required=None, available=None, message=None):
        self.ingredient_name = ingredient_name
        self.required = required
        self.available = available
        super().__init__(message or f"Insufficient stock for {ingredient_name}.")


class UnitConversionError(InsufficientStockError):
    """Raised when a recipe unit cannot be converted into the ingredient's unit."""

    def __init__(self, ingredient_name, from_unit, to_unit):
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(
            ingredient_name,
            message=f"Cannot convert {from_unit} to {to_unit} for {ingredient_name}.",
        )


class TransactionConflictError(OrderServiceError):
    """Raised when concurrent writers keep conflicting after every retry."""
    pass


class ConcurrentUpdateError(OrderServiceError):
    """Raised when a conditional ledger write finds a newer version."""
    pass


class MissingReferenceError(OrderServiceError):
    """Raised when an order references a menu item or ingredient that no longer exists."""
    pass
