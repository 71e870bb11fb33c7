"""
Services for ingredient stock business logic.

Stock writes live in :mod:`apps.inventory.services.ledger`.
"""

from .exceptions import (
    InventoryServiceError,
    IngredientNotFoundError,
    InvalidRestockError,
    MalformedRecordError,
)

__all__ = [
    'InventoryServiceError',
    'IngredientNotFoundError',
    'InvalidRestockError',
    'MalformedRecordError',
]
