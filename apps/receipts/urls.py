from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'receipts'

router = DefaultRouter()
router.register(r'', views.ReceiptViewSet, basename='receipt')

urlpatterns = [
    # GET  /api/receipts/order/{order_id}/ - Receipt for an order
    # POST /api/receipts/{order_id}/manual/ - Create receipt from order items
    # GET  /api/receipts/{id}/              - Receipt details
    # PUT  /api/receipts/{id}/              - Update fees and adjustments
    # GET  /api/receipts/{id}/split/        - Per-member split
    path('', include(router.urls)),
]
