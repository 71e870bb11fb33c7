from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'inventory'

router = DefaultRouter()
router.register(r'ingredients', views.IngredientViewSet, basename='ingredient')

urlpatterns = [
    # GET    /api/inventory/ingredients/?shop=<id>             - List ingredients
    # GET    /api/inventory/ingredients/{id}/                  - Ingredient details
    # POST   /api/inventory/ingredients/{id}/restock/          - Add stock units
    # POST   /api/inventory/ingredients/{id}/reset_usage/      - Reset consumed amount
    # GET    /api/inventory/ingredients/low_stock/?shop=<id>   - Low stock ingredients
    path('', include(router.urls)),
]
