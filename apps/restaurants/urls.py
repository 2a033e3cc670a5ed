from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'restaurants'

router = DefaultRouter()
router.register(r'', views.RestaurantViewSet, basename='restaurant')

urlpatterns = [
    # GET /api/restaurants/      - List restaurants
    # GET /api/restaurants/{id}/ - Restaurant with full menu
    path('', include(router.urls)),
]
