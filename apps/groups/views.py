from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .models import Group
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupListSerializer,
    GroupMemberSerializer,
    JoinGroupSerializer,
    AddMemberSerializer,
)
from .permissions import IsGroupAdmin

from apps.groups.services import (
    create_group,
    update_group,
    delete_group,
    join_group,
    leave_group,
    get_group_members,
    add_member,
    remove_member,
    # Exceptions
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    http_method_names = ['get', 'post', 'patch', 'delete']

    def get_queryset(self):
        """Return only groups where user is a member."""
        return Group.objects.filter(
            memberships__user=self.request.user
        ).select_related('owner').prefetch_related('memberships').distinct()

    def get_serializer_class(self):
        if self.action == 'list':
            return GroupListSerializer
        elif self.action == 'create':
            return GroupCreateSerializer
        return GroupSerializer

    def get_permissions(self):
        if self.action in ['partial_update', 'destroy']:
            return [IsAuthenticated(), IsGroupAdmin()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data.get('description', ''),
        )

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        group = self.get_object()
        serializer = GroupCreateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        group = update_group(
            group_id=group.id,
            user=request.user,
            name=serializer.validated_data.get('name'),
            description=serializer.validated_data.get('description'),
        )

        return Response(GroupSerializer(group, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        group = self.get_object()
        try:
            delete_group(group_id=group.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        """List members, or add one directly (admin only)."""
        group = self.get_object()
        if request.method == 'POST':
            return self._add_member(request, group)
        memberships = get_group_members(group_id=group.id)
        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """
        Join a group using invite code.

        Non-members cannot see the group yet, so this does not go
        through get_object().
        """
        serializer = JoinGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = join_group(
                group_id=pk,
                user=request.user,
                invite_code=serializer.validated_data['invite_code']
            )
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidInviteCodeError, AlreadyMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group."""
        group = self.get_object()
        try:
            leave_group(group_id=group.id, user=request.user)
        except (OwnerCannotLeaveError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _add_member(self, request, group):
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            membership = add_member(
                group_id=group.id,
                actor=request.user,
                user_id=serializer.validated_data['user_id'],
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (NotMemberError, AlreadyMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(GroupMemberSerializer(membership).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['delete'], url_path=r'members/(?P<user_id>[0-9a-f-]{36})')
    def kick_member(self, request, pk=None, user_id=None):
        """Remove a member (admin only)."""
        group = self.get_object()
        try:
            remove_member(group_id=group.id, actor=request.user, user_id=user_id)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
