"""
Manual stock operations on a single ingredient.

Both operations are conditional writes through LedgerStore, the same
path the consumption engine uses, and refresh menu availability for the
ingredient's dishes inside the same transaction.
"""

import logging

from apps.orders.services.exceptions import MissingReferenceError
from apps.orders.services.store import LedgerStore
from ..models import MAX_INGREDIENT_QUANTITY
from .exceptions import IngredientNotFoundError, InvalidRestockError

logger = logging.getLogger(__name__)


def _run_single_ingredient(ingredient_id, store, apply):
    store = store or LedgerStore()

    def work(txn):
        try:
            ingredient = txn.get_ingredient(ingredient_id)
        except MissingReferenceError as exc:
            raise IngredientNotFoundError(str(exc)) from exc
        apply(txn, ingredient)
        txn.refresh_availability(ingredient.shop, [ingredient.pk])
        return ingredient

    return store.run_transaction(work)


def restock_ingredient(ingredient_id, quantity, store=None):
    """
    Add ``quantity`` stock units to an ingredient.

    Args:
        ingredient_id: Ingredient to restock.
        quantity: Number of units (each of ``unit_value`` ``unit``) to add.
        store: Optional LedgerStore.

    Returns:
        Ingredient: The ingredient after the write.

    Raises:
        InvalidRestockError: quantity is not a positive number
        IngredientNotFoundError: ingredient does not exist
        TransactionConflictError: concurrent writers kept conflicting
    """
    try:
        quantity = float(quantity)
    except (TypeError, ValueError):
        raise InvalidRestockError(f"Restock quantity must be a number, got {quantity!r}.")
    if quantity <= 0:
        raise InvalidRestockError('Restock quantity must be greater than zero.')

    def apply(txn, ingredient):
        new_quantity = ingredient.quantity + quantity
        if new_quantity > MAX_INGREDIENT_QUANTITY:
            raise InvalidRestockError(
                f"Stock of {ingredient.name} cannot exceed {MAX_INGREDIENT_QUANTITY:,} units."
            )
        txn.write_ingredient(ingredient, quantity=new_quantity)

    ingredient = _run_single_ingredient(ingredient_id, store, apply)
    logger.info(
        "Restocked %s (%s) by %s units, now %s available",
        ingredient.name, ingredient.pk, quantity, ingredient.available_measurement,
    )
    return ingredient


def reset_ingredient_usage(ingredient_id, store=None):
    """Set an ingredient's cumulative ``used`` back to zero."""

    def apply(txn, ingredient):
        txn.write_ingredient(ingredient, used=0.0)

    ingredient = _run_single_ingredient(ingredient_id, store, apply)
    logger.info("Reset usage of %s (%s)", ingredient.name, ingredient.pk)
    return ingredient
