# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    """Inline admin for group memberships."""
    model = GroupMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = [
        'name',
        'owner',
        'member_count',
        'invite_code',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'owner__email', 'invite_code']
    readonly_fields = ['invite_code', 'created_at', 'updated_at']
    inlines = [GroupMembershipInline]
    ordering = ['-created_at']

    @admin.display(description='Members')
    def member_count(self, obj):
        return obj.memberships.count()
