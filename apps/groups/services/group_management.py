"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
import secrets
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .exceptions import (
    GroupNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    owner: User,
    description: str = '',
    max_retries: int = 5
) -> Group:
    """
    Create a new group and add the creator as owner.

    Each attempt generates an invite code, creates the group and the
    owner membership in one transaction. A unique-constraint collision on
    the invite code triggers a retry with a fresh code.

    Raises:
        RuntimeError: If cannot generate unique invite code after retries
    """
    for attempt in range(max_retries):
        invite_code = secrets.token_urlsafe(12)[:16]

        try:
            with transaction.atomic():
                group = Group.objects.create(
                    name=name,
                    owner=owner,
                    description=description,
                    invite_code=invite_code
                )
                GroupMembership.objects.create(
                    user=owner,
                    group=group,
                    role=GroupRole.OWNER
                )
        except IntegrityError:
            logger.warning("Invite code collision on attempt %d", attempt + 1)
            continue

        logger.info("Group %s created by %s", group.id, owner.id)
        return group

    raise RuntimeError(
        f"Failed to generate unique invite code after {max_retries} attempts"
    )


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with its owner and memberships preloaded.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .select_related('owner')
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=GroupMembership.objects.select_related('user')
                )
            )
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    user: User,
    name: Optional[str] = None,
    description: Optional[str] = None
) -> Group:
    """
    Update group details (admin only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not admin
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_admin(user):
        raise InsufficientPermissionsError("Only group admins can update the group")

    update_fields = ['updated_at']

    if name is not None:
        group.name = name
        update_fields.append('name')

    if description is not None:
        group.description = description
        update_fields.append('description')

    group.save(update_fields=update_fields)

    return group


@transaction.atomic
def delete_group(*, group_id: UUID, user: User) -> None:
    """
    Delete a group (owner only).

    Memberships, orders, receipts and payments cascade with it.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if group.owner_id != user.id:
        raise InsufficientPermissionsError("Only the group owner can delete the group")

    group.delete()
    logger.info("Group %s deleted by %s", group_id, user.id)
