import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.restaurants.models import Restaurant
from apps.orders.models import Order, OrderItem, OrderItemAddon, OrderStatus
from apps.receipts.models import Receipt


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def _user(email, name):
    return User.objects.create_user(email=email, password='TestPass123!', display_name=name)


@pytest.fixture
def alice(db):
    return _user('alice@example.com', 'Alice')


@pytest.fixture
def bob(db):
    return _user('bob@example.com', 'Bob')


@pytest.fixture
def carol(db):
    return _user('carol@example.com', 'Carol')


@pytest.fixture
def outsider(db):
    return _user('mallory@example.com', 'Mallory')


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def dinner_group(alice, bob, carol):
    group = Group.objects.create(name='Dinner Club', owner=alice)
    GroupMembership.objects.create(user=alice, group=group, role=GroupRole.OWNER)
    GroupMembership.objects.create(user=bob, group=group, role=GroupRole.MEMBER)
    GroupMembership.objects.create(user=carol, group=group, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def order(dinner_group, alice):
    restaurant = Restaurant.objects.create(name='Burger Barn')
    return Order.objects.create(
        group=dinner_group,
        restaurant=restaurant,
        initiator=alice,
        status=OrderStatus.CLOSED,
    )


@pytest.fixture
def alice_item(order, alice):
    return OrderItem.objects.create(
        order=order,
        user=alice,
        custom_item_name='Classic Burger',
        quantity=1,
        price_at_order=Decimal('100.00'),
    )


@pytest.fixture
def bob_item(order, bob):
    item = OrderItem.objects.create(
        order=order,
        user=bob,
        custom_item_name='Double Burger',
        quantity=2,
        price_at_order=Decimal('140.00'),
    )
    OrderItemAddon.objects.create(order_item=item, name='Bacon', price_at_order=Decimal('20.00'))
    return item


@pytest.fixture
def order_with_items(order, alice_item, bob_item):
    """Alice owes 100 and Bob 300 before fees."""
    return order


@pytest.fixture
def receipt(order_with_items):
    return Receipt.objects.create(
        order=order_with_items,
        subtotal=Decimal('400.00'),
        total_amount=Decimal('400.00'),
    )
