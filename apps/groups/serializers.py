from rest_framework import serializers
from .models import Group, GroupMembership
from apps.accounts.serializers import UserMinimalSerializer


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'invite_code',
            'owner',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'invite_code', 'owner', 'created_at', 'updated_at']

    def get_member_count(self, obj):
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Current user's role in the group."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name', 'description']


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'owner',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


class GroupMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class JoinGroupSerializer(serializers.Serializer):
    """Serializer for joining a group with invite code."""

    invite_code = serializers.CharField(max_length=16, required=True)


class AddMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
