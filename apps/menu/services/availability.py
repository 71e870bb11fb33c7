"""
Menu availability derived from ingredient stock.

Availability must be recomputed whenever ledger quantities change: after
every consumption commit, after a restock and after a usage reset.
"""

import logging

from django.utils import timezone

from apps.inventory.models import Ingredient
from ..models import MenuItem

logger = logging.getLogger(__name__)


def build_menu_index(shop, menu_item_ids=None):
    """
    Map menu item id -> MenuItem with its recipe lines prefetched.

    Args:
        shop: Shop whose menu is indexed.
        menu_item_ids: Optional iterable restricting the index.
    """
    queryset = MenuItem.objects.filter(shop=shop).prefetch_related('recipe_lines')
    if menu_item_ids is not None:
        queryset = queryset.filter(id__in=list(menu_item_ids))
    return {item.id: item for item in queryset}


def refresh_menu_availability(shop, ingredient_ids=None):
    """
    Recompute ``is_available`` for menu items of ``shop``.

    Args:
        shop: Shop whose menu is refreshed.
        ingredient_ids: When given, only items whose recipe uses one of
            these ingredients are recomputed.

    Returns:
        list[MenuItem]: Items whose availability flag changed.
    """
    queryset = MenuItem.objects.filter(shop=shop).prefetch_related('recipe_lines')
    if ingredient_ids is not None:
        queryset = queryset.filter(recipe_lines__ingredient_id__in=list(ingredient_ids)).distinct()
    items = list(queryset)

    needed = {
        line.ingredient_id
        for item in items
        for line in item.recipe_lines.all()
        if line.ingredient_id is not None
    }
    ingredient_index = Ingredient.objects.in_bulk(list(needed))

    now = timezone.now()
    changed = []
    for item in items:
        if item.refresh_availability(ingredient_index):
            item.updated_at = now
            changed.append(item)

    if changed:
        MenuItem.objects.bulk_update(changed, ['is_available', 'updated_at'])
        logger.info(
            "Menu availability changed for %d item(s) in shop %s: %s",
            len(changed), shop.id,
            ', '.join(f"{item.name}={'on' if item.is_available else 'off'}" for item in changed),
        )
    return changed
