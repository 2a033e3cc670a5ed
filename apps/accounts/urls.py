from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # Current user
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/orders/', views.my_orders, name='my-orders'),

    # Lookup
    path('users/search/', views.user_search, name='user-search'),
]
