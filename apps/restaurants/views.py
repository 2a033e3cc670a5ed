from django.db.models import Prefetch
from rest_framework import viewsets
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated

from .models import Restaurant, MenuCategory, MenuItem
from .serializers import RestaurantSerializer, RestaurantListSerializer


class RestaurantPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RestaurantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only restaurant catalog.

    list: Active restaurants (optional ``search`` by name)
    retrieve: Restaurant with categories, items, variants and addons
    """

    serializer_class = RestaurantSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RestaurantPagination

    def get_queryset(self):
        queryset = Restaurant.objects.filter(is_active=True).prefetch_related(
            Prefetch(
                'categories',
                queryset=MenuCategory.objects.prefetch_related(
                    Prefetch(
                        'items',
                        queryset=MenuItem.objects.prefetch_related('variants', 'addons')
                    )
                )
            )
        )
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)
        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return RestaurantListSerializer
        return RestaurantSerializer
