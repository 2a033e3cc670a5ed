"""
User lookup for adding members and billing manual extras.
"""

from django.db.models import Q, QuerySet

from apps.accounts.models import User

MIN_QUERY_LENGTH = 2


def search_users(*, query: str, exclude: User = None, limit: int = 20) -> QuerySet[User]:
    """
    Active users whose email or display name contains ``query``.

    Queries shorter than two characters return nothing.
    """
    query = (query or '').strip()
    if len(query) < MIN_QUERY_LENGTH:
        return User.objects.none()

    queryset = User.objects.filter(
        Q(email__icontains=query) | Q(display_name__icontains=query),
        is_active=True,
    )
    if exclude is not None:
        queryset = queryset.exclude(id=exclude.id)
    return queryset.order_by('display_name', 'email')[:limit]
