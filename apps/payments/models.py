# ==========================================
# apps/payments/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Payment(models.Model):
    """
    Money a member actually put towards an order's bill.

    A member may have several records for one order; they are summed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='payments')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='payments')
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['order', 'user'], name='payments_order_user_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} paid {self.amount} for order {self.order_id}"
