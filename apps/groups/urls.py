from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group details
    # PATCH  /api/groups/{id}/         - Update group (admin)
    # DELETE /api/groups/{id}/         - Delete group (owner)
    # GET    /api/groups/{id}/members/ - List members
    # POST   /api/groups/{id}/members/ - Add member (admin)
    # DELETE /api/groups/{id}/members/{user_id}/ - Remove member (admin)
    # POST   /api/groups/{id}/join/    - Join with invite code
    # POST   /api/groups/{id}/leave/   - Leave group
    path('', include(router.urls)),
]
