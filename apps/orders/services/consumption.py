"""
Consumption Transaction Engine
==============================

Decrements ingredient stock for an order as one all-or-nothing unit.

The engine runs inside :meth:`LedgerStore.run_transaction` in two passes:

    1. Aggregation: walk every order line and recipe line, read each
       ingredient once, convert the required amount into the ingredient's
       unit and accumulate a running total per ingredient id.
    2. Apply: once every total is known to be covered, add it to the
       ingredient's ``used`` with a conditional write.

Nothing is written until every ingredient has passed the sufficiency gate,
so a single short ingredient aborts the whole order. A recipe unit that
cannot be converted into the ingredient's unit counts as insufficient.

Example:
    Consuming a 2x Sweet Tea order::

        def work(txn):
            tea = txn.get_menu_item(tea_id)
            return consume_order_ingredients(txn, [(tea, 2)])

        result = LedgerStore().run_transaction(work)
        result.alerts   # [LowStockAlert(...)] for ingredients now low
"""

import logging
from dataclasses import dataclass, field

from apps.inventory.measurement import Measurement
from .exceptions import (
    InsufficientStockError,
    MissingReferenceError,
    UnitConversionError,
)

logger = logging.getLogger(__name__)

# Alerts at or below this share of the threshold are flagged urgent
URGENT_THRESHOLD_PERCENT = 120


@dataclass
class IngredientRequirement:
    """Total amount of one ingredient an order needs, in the ingredient's unit."""

    ingredient: object
    amount: float = 0.0
    unconvertible_units: list = field(default_factory=list)

    @property
    def convertible(self):
        return not self.unconvertible_units

    @property
    def is_covered(self):
        return self.convertible and self.ingredient.available >= self.amount

    @property
    def measurement(self):
        return Measurement(self.amount, self.ingredient.unit)


@dataclass
class LowStockAlert:
    ingredient_id: object
    name: str
    available: Measurement
    threshold: Measurement
    stock_status: str
    percentage: float

    @classmethod
    def from_ingredient(cls, ingredient):
        threshold = ingredient.low_stock_threshold
        percentage = ingredient.available / threshold * 100 if threshold > 0 else 0.0
        return cls(
            ingredient_id=ingredient.pk,
            name=ingredient.name,
            available=ingredient.available_measurement,
            threshold=ingredient.threshold_measurement,
            stock_status=ingredient.stock_status,
            percentage=round(percentage, 1),
        )

    @property
    def is_urgent(self):
        return self.percentage <= URGENT_THRESHOLD_PERCENT

    @property
    def message(self):
        return f"{self.name} is running low ({self.percentage:.1f}% of minimum stock left)"

    def to_dict(self):
        return {
            'ingredient_id': str(self.ingredient_id),
            'name': self.name,
            'available': self.available.to_dict(),
            'threshold': self.threshold.to_dict(),
            'stock_status': str(self.stock_status),
            'percentage': self.percentage,
            'is_urgent': self.is_urgent,
            'message': self.message,
        }


@dataclass
class ConsumptionResult:
    requirements: dict
    alerts: list

    @property
    def ingredient_ids(self):
        return list(self.requirements)


def aggregate_requirements(order_lines, load_ingredient):
    """
    Sum what an order needs per ingredient id.

    Each ingredient is loaded at most once, however many order lines or
    recipe lines reference it. Requirements whose unit cannot be converted
    are recorded on the requirement rather than raised, so callers decide
    how to report them.

    Args:
        order_lines: Iterable of ``(menu_item, quantity)`` pairs.
        load_ingredient: Callable taking an ingredient id and returning the
            Ingredient, or None when it does not exist.

    Returns:
        dict: ingredient id -> IngredientRequirement, in first-seen order.

    Raises:
        MissingReferenceError: a recipe line points at a missing ingredient
    """
    requirements = {}
    for menu_item, quantity in order_lines:
        for line in menu_item.recipe_lines.all():
            if line.ingredient_id is None:
                raise MissingReferenceError(
                    f"{menu_item.name} uses {line.ingredient_name}, which no longer exists."
                )

            requirement = requirements.get(line.ingredient_id)
            if requirement is None:
                ingredient = load_ingredient(line.ingredient_id)
                if ingredient is None:
                    raise MissingReferenceError(
                        f"{menu_item.name} uses {line.ingredient_name}, which no longer exists."
                    )
                requirement = requirements[line.ingredient_id] = IngredientRequirement(ingredient)

            converted = line.requirement_in(requirement.ingredient)
            if converted is None:
                requirement.unconvertible_units.append(line.required_unit)
                continue
            requirement.amount += converted.value * quantity
    return requirements


def check_requirements(requirements):
    """
    Sufficiency gate.

    Raises:
        UnitConversionError: a recipe unit does not fit the ingredient's unit
        InsufficientStockError: an ingredient cannot cover its total
    """
    for requirement in requirements.values():
        ingredient = requirement.ingredient
        if not requirement.convertible:
            logger.warning(
                "Recipe unit %s cannot be converted to %s for ingredient %s (%s)",
                requirement.unconvertible_units[0], ingredient.unit, ingredient.name, ingredient.pk,
            )
            raise UnitConversionError(ingredient.name, requirement.unconvertible_units[0], ingredient.unit)

        if not requirement.is_covered:
            raise InsufficientStockError(
                ingredient.name,
                required=requirement.measurement,
                available=ingredient.available_measurement,
            )


def consume_order_ingredients(txn, order_lines):
    """
    Decrement stock for ``order_lines`` inside an open store transaction.

    Args:
        txn: LedgerStore inside ``run_transaction``.
        order_lines: List of ``(menu_item, quantity)`` pairs.

    Returns:
        ConsumptionResult: Aggregated requirements and low stock alerts
        computed from the post-write state.
    """
    requirements = aggregate_requirements(order_lines, txn.get_ingredient)
    check_requirements(requirements)

    alerts = []
    for requirement in requirements.values():
        ingredient = requirement.ingredient
        if requirement.amount > 0:
            txn.write_ingredient(ingredient, used=ingredient.used + requirement.amount)
        if ingredient.is_low_stock:
            alerts.append(LowStockAlert.from_ingredient(ingredient))

    return ConsumptionResult(requirements=requirements, alerts=alerts)
