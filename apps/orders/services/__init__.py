"""Services for order business logic."""

from .exceptions import (
    OrderServiceError,
    OrderValidationFailed,
    InsufficientStockError,
    UnitConversionError,
    TransactionConflictError,
    ConcurrentUpdateError,
    MissingReferenceError,
)
from .validation import (
    IssueCode,
    OrderRules,
    OrderValidationIssue,
    validate_order,
)
from .consumption import (
    ConsumptionResult,
    IngredientRequirement,
    LowStockAlert,
    aggregate_requirements,
    consume_order_ingredients,
)
from .store import LedgerStore
from .placement import (
    PlacementResult,
    check_order,
    place_order,
)

__all__ = [
    # Exceptions
    'OrderServiceError',
    'OrderValidationFailed',
    'InsufficientStockError',
    'UnitConversionError',
    'TransactionConflictError',
    'ConcurrentUpdateError',
    'MissingReferenceError',
    # Validation
    'IssueCode',
    'OrderRules',
    'OrderValidationIssue',
    'validate_order',
    # Consumption
    'ConsumptionResult',
    'IngredientRequirement',
    'LowStockAlert',
    'aggregate_requirements',
    'consume_order_ingredients',
    # Storage
    'LedgerStore',
    # Placement
    'PlacementResult',
    'check_order',
    'place_order',
]
