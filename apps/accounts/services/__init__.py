"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
)
from .user_registration import register_user
from .user_search import search_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    # Services
    'register_user',
    'search_users',
]
