from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/                      - List orders in user's groups
    # POST   /api/orders/                      - Open an order for a group
    # GET    /api/orders/{id}/                 - Order with items
    # POST   /api/orders/{id}/items/           - Add items
    # DELETE /api/orders/{id}/items/{item_id}/ - Remove an item
    # POST   /api/orders/{id}/close/           - Close (initiator)
    # POST   /api/orders/{id}/cancel/          - Cancel (initiator)
    path('', include(router.urls)),
]
