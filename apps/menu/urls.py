from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'menu'

router = DefaultRouter()
router.register(r'items', views.MenuItemViewSet, basename='menuitem')

urlpatterns = [
    # GET    /api/menu/items/?shop=<id>[&category=&available=]  - List menu
    # GET    /api/menu/items/{id}/                              - Item with recipe
    path('refresh_availability/', views.refresh_availability, name='refresh-availability'),
    path('', include(router.urls)),
]
