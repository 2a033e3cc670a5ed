from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    OrderItemSerializer,
    AddItemsSerializer,
)

from apps.orders.services import (
    list_user_orders,
    create_order,
    add_items,
    remove_item,
    close_order,
    cancel_order,
    # Exceptions
    OrderNotFoundError,
    ActiveOrderExistsError,
    OrderNotOpenError,
    CatalogItemNotFoundError,
    OrderItemNotFoundError,
    NotInitiatorError,
    CannotRemoveItemError,
)


class OrderPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet
):
    """
    Group orders.

    Views are thin HTTP handlers; rules live in apps.orders.services.
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination

    def get_queryset(self):
        return list_user_orders(
            user=self.request.user,
            status=self.request.query_params.get('status'),
        )

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        try:
            order = create_order(
                group=serializer.validated_data['group'],
                restaurant=serializer.validated_data['restaurant'],
                initiator=request.user,
            )
        except ActiveOrderExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def items(self, request, pk=None):
        """Add one or more items for the current user."""
        order = self.get_object()
        serializer = AddItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            created = add_items(
                order_id=order.id,
                user=request.user,
                items=serializer.validated_data['items'],
            )
        except (OrderNotOpenError, CatalogItemNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            OrderItemSerializer(created, many=True).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['delete'], url_path=r'items/(?P<item_id>[0-9a-f-]{36})')
    def delete_item(self, request, pk=None, item_id=None):
        order = self.get_object()
        try:
            remove_item(order_id=order.id, item_id=item_id, user=request.user)
        except (OrderNotFoundError, OrderItemNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OrderNotOpenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except CannotRemoveItemError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _finish(self, request, handler):
        order = self.get_object()
        try:
            order = handler(order_id=order.id, user=request.user)
        except NotInitiatorError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except OrderNotOpenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        """Close the order (initiator only)."""
        return self._finish(request, close_order)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel the order (initiator only)."""
        return self._finish(request, cancel_order)
