import pytest
from unittest import mock
from django.contrib import admin
from django.test import RequestFactory
from apps.inventory.measurement import MeasurementUnit
from apps.menu.admin import MenuItemAdmin
from apps.menu.models import MenuItem


@pytest.mark.django_db
class TestMenuItemAdmin:

    def test_recipe_edit_refreshes_availability(self, menu_user, water, tea_bags, add_recipe_line):
        model_admin = MenuItemAdmin(MenuItem, admin.site)
        request = RequestFactory().post('/admin/menu/menuitem/')
        request.user = menu_user

        # 30 tea bags per cup, 20 in stock
        add_recipe_line(water, tea_bags, 30, MeasurementUnit.PIECE)
        model_admin.save_related(request, mock.Mock(instance=water), [], True)

        water.refresh_from_db()
        assert water.is_available is False
