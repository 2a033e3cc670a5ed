import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.restaurants.models import (
    Restaurant,
    MenuCategory,
    MenuItem,
    MenuItemVariant,
    MenuItemAddon,
)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def diner(db):
    return User.objects.create_user(
        email='diner@example.com',
        password='TestPass123!',
        display_name='Diner',
    )


@pytest.fixture
def diner_client(diner):
    client = APIClient()
    refresh = RefreshToken.for_user(diner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def restaurant(db):
    restaurant = Restaurant.objects.create(name='Burger Barn')
    category = MenuCategory.objects.create(restaurant=restaurant, name='Burgers')
    burger = MenuItem.objects.create(category=category, name='Classic', base_price=Decimal('200.00'))
    MenuItemVariant.objects.create(menu_item=burger, name='Double', price_diff=Decimal('60.00'))
    MenuItemAddon.objects.create(menu_item=burger, name='Bacon', price=Decimal('55.00'))
    return restaurant
