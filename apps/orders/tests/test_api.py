import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.orders.models import Order, OrderItem, OrderStatus


@pytest.mark.django_db
class TestOrderCreate:
    """Tests for POST /api/orders/"""

    def test_create_order(self, initiator_client, lunch_group, restaurant):
        url = reverse('orders:order-list')
        response = initiator_client.post(
            url,
            {'group': str(lunch_group.id), 'restaurant': str(restaurant.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == OrderStatus.OPEN
        assert response.data['restaurant_name'] == 'Burger Barn'
        assert response.data['items'] == []

    def test_second_open_order_returns_400(self, member_client, open_order, lunch_group, restaurant):
        url = reverse('orders:order-list')
        response = member_client.post(
            url,
            {'group': str(lunch_group.id), 'restaurant': str(restaurant.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_outsider_cannot_open_order(self, outsider_client, lunch_group, restaurant):
        url = reverse('orders:order-list')
        response = outsider_client.post(
            url,
            {'group': str(lunch_group.id), 'restaurant': str(restaurant.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Order.objects.exists()


@pytest.mark.django_db
class TestOrderRead:

    def test_list_orders(self, member_client, open_order):
        response = member_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1

    def test_outsider_gets_404(self, outsider_client, open_order):
        url = reverse('orders:order-detail', kwargs={'pk': open_order.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrderItems:
    """Tests for POST /api/orders/{id}/items/ and DELETE /api/orders/{id}/items/{item_id}/"""

    def test_add_catalog_and_custom_items(self, member_client, open_order, burger):
        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = member_client.post(url, {
            'items': [
                {
                    'menu_item': str(burger.id),
                    'variant': str(burger.variants.get().id),
                    'quantity': 1,
                    'addons': [str(burger.addons.get().id)],
                },
                {'custom_item_name': 'Lemonade', 'unit_price': '25.00', 'quantity': 2},
            ]
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert [i['name'] for i in response.data] == ['Classic', 'Lemonade']
        assert response.data[0]['line_total'] == '315.00'
        assert response.data[1]['line_total'] == '50.00'

    def test_item_needs_menu_item_or_custom_name(self, member_client, open_order):
        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = member_client.post(url, {'items': [{'quantity': 1}]}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_custom_item_needs_price(self, member_client, open_order):
        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = member_client.post(
            url,
            {'items': [{'custom_item_name': 'Tea', 'quantity': 1}]},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_zero_quantity_rejected(self, member_client, open_order, burger):
        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = member_client.post(
            url,
            {'items': [{'menu_item': str(burger.id), 'quantity': 0}]},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_menu_item_returns_400(self, member_client, open_order, other_restaurant_item):
        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = member_client.post(
            url,
            {'items': [{'menu_item': str(other_restaurant_item.id), 'quantity': 1}]},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_remove_others_item_forbidden(self, member_client, open_order, initiator):
        item = OrderItem.objects.create(
            order=open_order,
            user=initiator,
            custom_item_name='Salad',
            quantity=1,
            price_at_order=Decimal('80.00'),
        )
        url = reverse('orders:order-delete-item', kwargs={'pk': open_order.id, 'item_id': item.id})
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert OrderItem.objects.filter(id=item.id).exists()

    def test_initiator_removes_item(self, initiator_client, open_order, member):
        item = OrderItem.objects.create(
            order=open_order,
            user=member,
            custom_item_name='Salad',
            quantity=1,
            price_at_order=Decimal('80.00'),
        )
        url = reverse('orders:order-delete-item', kwargs={'pk': open_order.id, 'item_id': item.id})
        response = initiator_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not OrderItem.objects.filter(id=item.id).exists()

    def test_remove_malformed_item_id(self, initiator_client, open_order):
        response = initiator_client.delete(f'/api/orders/{open_order.id}/items/not-a-uuid/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_remove_uuid_shaped_garbage_item_id(self, initiator_client, open_order):
        url = reverse('orders:order-delete-item', kwargs={'pk': open_order.id, 'item_id': '-' * 36})
        response = initiator_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestOrderCloseCancel:

    def test_initiator_closes(self, initiator_client, open_order):
        url = reverse('orders:order-close', kwargs={'pk': open_order.id})
        response = initiator_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == OrderStatus.CLOSED

    def test_member_cannot_cancel(self, member_client, open_order):
        url = reverse('orders:order-cancel', kwargs={'pk': open_order.id})
        response = member_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        open_order.refresh_from_db()
        assert open_order.status == OrderStatus.OPEN

    def test_items_rejected_after_close(self, initiator_client, open_order, burger):
        initiator_client.post(reverse('orders:order-close', kwargs={'pk': open_order.id}))

        url = reverse('orders:order-items', kwargs={'pk': open_order.id})
        response = initiator_client.post(
            url,
            {'items': [{'menu_item': str(burger.id), 'quantity': 1}]},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
