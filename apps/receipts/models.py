# ==========================================
# apps/receipts/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Receipt(models.Model):
    """
    The actual bill for an order.

    Fee fields hold what the restaurant charged. ``adjustments`` holds the
    overlay of per-item price overrides and manual extra charges that the
    split calculator applies on top of the ordered items.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField('orders.Order', on_delete=models.CASCADE, related_name='receipt')

    image_url = models.URLField(max_length=500, blank=True)

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    service_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    delivery_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # {"individualItemOverrides": {item_id: price}, "manualExtraItems": [...]}
    adjustments = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'receipts'

    def __str__(self):
        return f"Receipt for order {self.order_id}: {self.total_amount}"

    @property
    def shared_fees(self):
        return self.tax + self.service_fee + self.delivery_fee
