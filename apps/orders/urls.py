from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/?shop=<id>     - List orders of a shop
    # POST   /api/orders/               - Place order
    # GET    /api/orders/{id}/          - Order details
    # POST   /api/orders/validate/      - Check a draft without placing it
    path('', include(router.urls)),
]
