"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
)

from .group_management import (
    create_group,
    update_group,
    delete_group,
    get_group_by_id,
)

from .membership_management import (
    join_group,
    leave_group,
    get_group_members,
    require_membership,
    add_member,
    remove_member,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'InvalidInviteCodeError',
    'AlreadyMemberError',
    'NotMemberError',
    'OwnerCannotLeaveError',
    'InsufficientPermissionsError',

    # Group Management
    'create_group',
    'update_group',
    'delete_group',
    'get_group_by_id',

    # Membership Management
    'join_group',
    'leave_group',
    'get_group_members',
    'require_membership',
    'add_member',
    'remove_member',
]
