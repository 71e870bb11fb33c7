import pytest
from apps.inventory.measurement import MeasurementUnit
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem, RecipeLine
from apps.menu.services import build_menu_index, refresh_menu_availability


def index_of(*ingredients):
    return {ingredient.pk: ingredient for ingredient in ingredients}


@pytest.mark.django_db
class TestRecipeLineSatisfaction:

    def test_satisfied_across_units(self, milk_tea, milk):
        line = milk_tea.recipe_lines.get(ingredient=milk)
        assert line.requirement_in(milk).value == pytest.approx(200)
        assert line.is_satisfied_by(milk)
        assert line.is_satisfied_by(milk, quantity=10)
        assert not line.is_satisfied_by(milk, quantity=11)

    def test_other_ingredient_rejected(self, milk_tea, milk, sugar):
        line = milk_tea.recipe_lines.get(ingredient=milk)
        assert not line.is_satisfied_by(sugar)
        assert not line.is_satisfied_by(None)

    def test_incompatible_unit_unsatisfied(self, menu_shop, sugar, add_recipe_line):
        item = MenuItem.objects.create(shop=menu_shop, name='Odd Drink', price='1000')
        line = add_recipe_line(item, sugar, 1, MeasurementUnit.MILLILITER)
        assert not line.is_satisfied_by(sugar)


@pytest.mark.django_db
class TestMenuItemAvailability:

    def test_all_lines_satisfied(self, milk_tea, sugar, milk, tea_bags):
        assert milk_tea.compute_availability(index_of(sugar, milk, tea_bags))

    def test_one_line_unsatisfied(self, milk_tea, sugar, milk, tea_bags):
        tea_bags.used = 20
        assert not milk_tea.compute_availability(index_of(sugar, milk, tea_bags))

    def test_missing_ingredient_unsatisfied(self, milk_tea, sugar, milk):
        assert not milk_tea.compute_availability(index_of(sugar, milk))

    def test_empty_recipe_always_available(self, water):
        assert water.compute_availability({})

    def test_refresh_reports_change(self, milk_tea, sugar, milk, tea_bags):
        tea_bags.used = 20
        assert milk_tea.refresh_availability(index_of(sugar, milk, tea_bags)) is True
        assert milk_tea.is_available is False
        assert milk_tea.refresh_availability(index_of(sugar, milk, tea_bags)) is False


@pytest.mark.django_db
class TestRefreshMenuAvailability:

    def test_flags_follow_stock(self, menu_shop, milk_tea, water, tea_bags):
        Ingredient.objects.filter(pk=tea_bags.pk).update(used=20)

        changed = refresh_menu_availability(menu_shop)

        assert [item.name for item in changed] == ['Milk Tea']
        milk_tea.refresh_from_db()
        water.refresh_from_db()
        assert milk_tea.is_available is False
        assert water.is_available is True

    def test_restricted_to_ingredients(self, menu_shop, milk_tea, sugar, tea_bags):
        Ingredient.objects.filter(pk=tea_bags.pk).update(used=20)

        changed = refresh_menu_availability(menu_shop, ingredient_ids=[sugar.pk])
        assert [item.name for item in changed] == ['Milk Tea']

        other = refresh_menu_availability(menu_shop, ingredient_ids=[])
        assert other == []

    def test_deleted_ingredient_makes_item_unavailable(self, menu_shop, milk_tea, tea_bags):
        tea_bags.delete()

        refresh_menu_availability(menu_shop)

        milk_tea.refresh_from_db()
        assert milk_tea.is_available is False
        assert RecipeLine.objects.filter(menu_item=milk_tea, ingredient__isnull=True).count() == 1

    def test_build_menu_index(self, menu_shop, milk_tea, water):
        index = build_menu_index(menu_shop)
        assert set(index) == {milk_tea.pk, water.pk}

        index = build_menu_index(menu_shop, [water.pk])
        assert list(index) == [water.pk]
