import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from apps.restaurants.models import Restaurant, MenuItem


@pytest.mark.django_db
class TestRestaurantCatalog:
    """Tests for GET /api/restaurants/"""

    def test_list_restaurants(self, diner_client, restaurant):
        response = diner_client.get(reverse('restaurants:restaurant-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [r['name'] for r in response.data['results']] == ['Burger Barn']

    def test_list_hides_inactive(self, diner_client, restaurant):
        Restaurant.objects.create(name='Closed Diner', is_active=False)

        response = diner_client.get(reverse('restaurants:restaurant-list'))

        assert response.data['count'] == 1

    def test_search_by_name(self, diner_client, restaurant):
        response = diner_client.get(reverse('restaurants:restaurant-list'), {'search': 'pizza'})

        assert response.data['count'] == 0

    def test_retrieve_includes_menu(self, diner_client, restaurant):
        url = reverse('restaurants:restaurant-detail', args=[restaurant.id])
        response = diner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        item = response.data['categories'][0]['items'][0]
        assert item['name'] == 'Classic'
        assert item['base_price'] == '200.00'
        assert item['variants'][0]['price_diff'] == '60.00'
        assert item['addons'][0]['name'] == 'Bacon'

    def test_requires_authentication(self, api_client, restaurant):
        response = api_client.get(reverse('restaurants:restaurant-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
def test_seed_restaurants_command():
    call_command('seed_restaurants')

    restaurant = Restaurant.objects.get(name='Buffalo Burger')
    assert restaurant.categories.count() == 3
    assert MenuItem.objects.filter(category__restaurant=restaurant).count() == 10
    old_school = MenuItem.objects.get(name='Old School')
    assert old_school.variants.count() == 2
    assert old_school.addons.count() == 13
