"""
Membership management service.

Handles group membership operations with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .exceptions import (
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def join_group(
    *,
    group_id: UUID,
    user: User,
    invite_code: str
) -> GroupMembership:
    """
    Join a group using an invite code.

    The group row is locked while the membership is checked and created.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InvalidInviteCodeError: If invite code is incorrect
        AlreadyMemberError: If user is already a member
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if group.invite_code != invite_code:
        raise InvalidInviteCodeError("Invalid invite code")

    if group.has_member(user):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    try:
        membership = GroupMembership.objects.create(
            user=user,
            group=group,
            role=GroupRole.MEMBER
        )
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    logger.info("User %s joined group %s", user.id, group.id)
    return membership


@transaction.atomic
def leave_group(*, group_id: UUID, user: User) -> None:
    """
    Leave a group.

    Owner cannot leave their own group - they must delete it instead.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
        OwnerCannotLeaveError: If user is the owner
    """
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if group.owner_id == user.id:
        raise OwnerCannotLeaveError("Group owner cannot leave. Delete the group instead.")

    deleted, _ = GroupMembership.objects.filter(user=user, group=group).delete()
    if not deleted:
        raise NotMemberError(f"User is not a member of {group.name}")

    logger.info("User %s left group %s", user.id, group.id)


def get_group_members(*, group_id: UUID) -> QuerySet[GroupMembership]:
    """
    Get all members of a group in the order they joined.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return (
        GroupMembership.objects
        .filter(group_id=group_id)
        .select_related('user')
        .order_by('joined_at')
    )


def require_membership(*, group: Group, user: User) -> None:
    """
    Guard used by order, receipt and payment services.

    Raises:
        NotMemberError: If user is not a member of the group
    """
    if not group.has_member(user):
        raise NotMemberError(f"User is not a member of {group.name}")


@transaction.atomic
def add_member(*, group_id: UUID, actor: User, user_id: UUID) -> GroupMembership:
    """
    Add a user to a group directly (admin only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If actor is not an admin
        NotMemberError: If the user to add doesn't exist or is inactive
        AlreadyMemberError: If user is already a member
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_admin(actor):
        raise InsufficientPermissionsError("Only group admins can add members")

    user = User.objects.filter(id=user_id, is_active=True).first()
    if user is None:
        raise NotMemberError(f"User {user_id} not found")

    if group.has_member(user):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    membership = GroupMembership.objects.create(user=user, group=group, role=GroupRole.MEMBER)
    logger.info("User %s added to group %s by %s", user.id, group.id, actor.id)
    return membership


@transaction.atomic
def remove_member(*, group_id: UUID, actor: User, user_id: UUID) -> None:
    """
    Remove another member from a group (admin only).

    The owner can never be removed, and admins can only be removed by
    the owner.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If actor lacks the rights for this member
        NotMemberError: If the user is not a member
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_admin(actor):
        raise InsufficientPermissionsError("Only group admins can remove members")

    membership = GroupMembership.objects.filter(group=group, user_id=user_id).first()
    if membership is None:
        raise NotMemberError(f"User is not a member of {group.name}")

    if membership.role == GroupRole.OWNER:
        raise InsufficientPermissionsError("The group owner cannot be removed")
    if membership.role == GroupRole.ADMIN and group.owner_id != actor.id:
        raise InsufficientPermissionsError("Only the owner can remove an admin")

    membership.delete()
    logger.info("User %s removed from group %s by %s", user_id, group.id, actor.id)
