import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.restaurants.models import (
    Restaurant,
    MenuCategory,
    MenuItem,
    MenuItemVariant,
    MenuItemAddon,
)
from apps.orders.models import Order, OrderStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def initiator(db):
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='mallory@example.com',
        password='TestPass123!',
        display_name='Mallory',
    )


@pytest.fixture
def initiator_client(initiator):
    return _client_for(initiator)


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def lunch_group(initiator, member):
    group = Group.objects.create(name='Lunch Crew', owner=initiator)
    GroupMembership.objects.create(user=initiator, group=group, role=GroupRole.OWNER)
    GroupMembership.objects.create(user=member, group=group, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def restaurant(db):
    restaurant = Restaurant.objects.create(name='Burger Barn')
    category = MenuCategory.objects.create(restaurant=restaurant, name='Burgers')
    burger = MenuItem.objects.create(category=category, name='Classic', base_price=Decimal('200.00'))
    MenuItemVariant.objects.create(menu_item=burger, name='Double', price_diff=Decimal('60.00'))
    MenuItemAddon.objects.create(menu_item=burger, name='Bacon', price=Decimal('55.00'))
    MenuItem.objects.create(category=category, name='Fries', base_price=Decimal('62.00'))
    return restaurant


@pytest.fixture
def burger(restaurant):
    return MenuItem.objects.get(category__restaurant=restaurant, name='Classic')


@pytest.fixture
def other_restaurant_item(db):
    other = Restaurant.objects.create(name='Pizza Place')
    category = MenuCategory.objects.create(restaurant=other, name='Pizza')
    return MenuItem.objects.create(category=category, name='Margherita', base_price=Decimal('150.00'))


@pytest.fixture
def open_order(lunch_group, restaurant, initiator):
    return Order.objects.create(
        group=lunch_group,
        restaurant=restaurant,
        initiator=initiator,
        status=OrderStatus.OPEN,
    )
