"""
Order validation run before any stock transaction is opened.

``validate_order`` collects every problem it finds instead of stopping at
the first, so the till can show the whole list at once. Ingredient checks
sum requirements across all lines first: two drinks sharing sugar are
checked against their combined need.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.conf import settings

from .consumption import aggregate_requirements
from .exceptions import MissingReferenceError

logger = logging.getLogger(__name__)


class IssueCode:
    EMPTY_ORDER = 'empty_order'
    TOO_MANY_ITEMS = 'too_many_items'
    INVALID_QUANTITY = 'invalid_quantity'
    INVALID_PRICE = 'invalid_price'
    NOTE_TOO_LONG = 'note_too_long'
    UNKNOWN_MENU_ITEM = 'unknown_menu_item'
    INVALID_DISCOUNT = 'invalid_discount'
    TOTAL_OUT_OF_RANGE = 'total_out_of_range'
    MISSING_INGREDIENT = 'missing_ingredient'
    UNIT_MISMATCH = 'unit_mismatch'
    INSUFFICIENT_STOCK = 'insufficient_stock'


@dataclass(frozen=True)
class OrderValidationIssue:
    code: str
    message: str
    line: Optional[int] = None
    ingredient: Optional[str] = None

    def to_dict(self):
        return {
            'code': self.code,
            'message': self.message,
            'line': self.line,
            'ingredient': self.ingredient,
        }


@dataclass(frozen=True)
class OrderRules:
    max_line_items: int = 50
    max_item_quantity: int = 99
    max_note_length: int = 200
    max_order_total: Decimal = Decimal('10000000')

    @classmethod
    def from_settings(cls):
        rules = getattr(settings, 'POS_ORDER_RULES', {})
        defaults = cls()
        return cls(
            max_line_items=int(rules.get('MAX_LINE_ITEMS', defaults.max_line_items)),
            max_item_quantity=int(rules.get('MAX_ITEM_QUANTITY', defaults.max_item_quantity)),
            max_note_length=int(rules.get('MAX_NOTE_LENGTH', defaults.max_note_length)),
            max_order_total=Decimal(str(rules.get('MAX_ORDER_TOTAL', defaults.max_order_total))),
        )


def validate_order(draft, menu_index, ingredient_index, rules=None):
    """
    Check a draft order.

    Args:
        draft: OrderDraft to check.
        menu_index: menu item id -> MenuItem with recipe lines.
        ingredient_index: ingredient id -> Ingredient with current stock.
        rules: OrderRules; read from settings when omitted.

    Returns:
        list[OrderValidationIssue]: Empty when the order may be submitted.
    """
    rules = rules or OrderRules.from_settings()
    issues = []

    if draft.is_empty:
        issues.append(OrderValidationIssue(
            IssueCode.EMPTY_ORDER, 'Order must contain at least one item.'
        ))
    elif len(draft.lines) > rules.max_line_items:
        issues.append(OrderValidationIssue(
            IssueCode.TOO_MANY_ITEMS,
            f"Order cannot contain more than {rules.max_line_items} items.",
        ))

    for index, line in enumerate(draft.lines):
        if not 1 <= line.quantity <= rules.max_item_quantity:
            issues.append(OrderValidationIssue(
                IssueCode.INVALID_QUANTITY,
                f"Quantity of {line.name} must be between 1 and {rules.max_item_quantity}.",
                line=index,
            ))
        known = line.menu_item_id in menu_index
        if known and line.unit_price <= 0:
            issues.append(OrderValidationIssue(
                IssueCode.INVALID_PRICE,
                f"Price of {line.name} must be greater than zero.",
                line=index,
            ))
        if len(line.note or '') > rules.max_note_length:
            issues.append(OrderValidationIssue(
                IssueCode.NOTE_TOO_LONG,
                f"Note for {line.name} cannot exceed {rules.max_note_length} characters.",
                line=index,
            ))
        if not known:
            issues.append(OrderValidationIssue(
                IssueCode.UNKNOWN_MENU_ITEM,
                f"{line.name} is no longer on the menu.",
                line=index,
            ))

    discount = Decimal(draft.discount_percent or 0)
    if not Decimal('0') <= discount <= Decimal('100'):
        issues.append(OrderValidationIssue(
            IssueCode.INVALID_DISCOUNT, 'Discount must be between 0 and 100 percent.'
        ))

    if not Decimal('0') <= draft.total <= rules.max_order_total:
        issues.append(OrderValidationIssue(
            IssueCode.TOTAL_OUT_OF_RANGE,
            f"Order total must be between 0 and {rules.max_order_total:,}.",
        ))

    issues.extend(_ingredient_issues(draft, menu_index, ingredient_index, rules))
    return issues


def _ingredient_issues(draft, menu_index, ingredient_index, rules):
    order_lines = [
        (menu_index[line.menu_item_id], line.quantity)
        for line in draft.lines
        if line.menu_item_id in menu_index and 1 <= line.quantity <= rules.max_item_quantity
    ]

    try:
        requirements = aggregate_requirements(order_lines, ingredient_index.get)
    except MissingReferenceError as exc:
        return [OrderValidationIssue(IssueCode.MISSING_INGREDIENT, str(exc))]

    issues = []
    for requirement in requirements.values():
        ingredient = requirement.ingredient
        if not requirement.convertible:
            logger.warning(
                "Recipe unit %s cannot be converted to %s for ingredient %s (%s)",
                requirement.unconvertible_units[0], ingredient.unit, ingredient.name, ingredient.pk,
            )
            issues.append(OrderValidationIssue(
                IssueCode.UNIT_MISMATCH,
                f"Recipe amount for {ingredient.name} uses a unit that cannot be "
                f"converted to {ingredient.unit}.",
                ingredient=ingredient.name,
            ))
        elif not requirement.is_covered:
            issues.append(OrderValidationIssue(
                IssueCode.INSUFFICIENT_STOCK,
                f"Not enough {ingredient.name}: {requirement.measurement} needed, "
                f"{ingredient.available_measurement} available.",
                ingredient=ingredient.name,
            ))
    return issues
