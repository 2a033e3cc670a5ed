# ==========================================
# apps/orders/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class OrderStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    CLOSED = 'closed', 'Closed'
    CANCELLED = 'cancelled', 'Cancelled'


class Order(models.Model):
    """One shared restaurant order placed by a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='orders')
    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='orders'
    )
    initiator = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='initiated_orders'
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.OPEN
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['group', 'status'], name='orders_group_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.restaurant.name} order for {self.group.name} ({self.status})"

    @property
    def is_open(self):
        return self.status == OrderStatus.OPEN


class OrderItem(models.Model):
    """
    A single ordered product attributed to one member.

    Prices are copied at order time so later menu changes do not move
    what was ordered.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='order_items')

    # Catalog reference, or a free-text item typed in by the member
    menu_item = models.ForeignKey(
        'restaurants.MenuItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    variant = models.ForeignKey(
        'restaurants.MenuItemVariant',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    custom_item_name = models.CharField(max_length=200, blank=True)

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price_at_order = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        indexes = [
            models.Index(fields=['order', 'user'], name='order_items_order_user_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.display_name} for {self.user.get_display_name()}"

    @property
    def display_name(self):
        if self.menu_item_id:
            return self.menu_item.name
        return self.custom_item_name or 'Unnamed Item'

    @property
    def line_total(self):
        """Ordered price: unit price times quantity plus each addon once."""
        addons_total = sum((a.price_at_order for a in self.addons.all()), Decimal('0.00'))
        return self.price_at_order * self.quantity + addons_total


class OrderItemAddon(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_item = models.ForeignKey(OrderItem, on_delete=models.CASCADE, related_name='addons')
    addon = models.ForeignKey(
        'restaurants.MenuItemAddon',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_item_addons'
    )
    name = models.CharField(max_length=200)
    price_at_order = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'order_item_addons'

    def __str__(self):
        return f"{self.name} (+{self.price_at_order})"
