from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    # GET  /api/orders/{order_id}/payments/            - List payments
    # POST /api/orders/{order_id}/payments/            - Replace payments
    # GET  /api/orders/{order_id}/payments/settlement/ - Balances and transfers
    path('', views.order_payments, name='payment-list'),
    path('settlement/', views.order_settlement, name='settlement'),
]
