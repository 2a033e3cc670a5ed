import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.accounts.services import register_user, UserRegistrationError


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_service_rejects_duplicate(self, user):
        with pytest.raises(UserRegistrationError):
            register_user(email=user.email, password='SecurePass123!')


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'WrongPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == 'Test User'

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_display_name_falls_back_to_email_prefix(self, db):
        user = User.objects.create_user(email='nobody@example.com', password='x')
        assert user.get_display_name() == 'nobody'


# =============================================================================
# Profile and Lookup Tests
# =============================================================================

@pytest.mark.django_db
class TestProfileUpdate:
    """Tests for PATCH /api/auth/user/update/"""

    def test_change_display_name(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'display_name': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.display_name == 'Renamed'

    def test_email_not_changeable(self, authenticated_client, user):
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'email': 'hijack@example.com'})

        user.refresh_from_db()
        assert user.email == 'testuser@example.com'


@pytest.mark.django_db
class TestUserSearch:
    """Tests for GET /api/auth/users/search/"""

    def test_search_by_name(self, authenticated_client, user):
        User.objects.create_user(email='zed@example.com', password='TestPass123!', display_name='Zed Burger')
        response = authenticated_client.get(reverse('users:user-search'), {'q': 'burg'})

        assert response.status_code == status.HTTP_200_OK
        assert [u['email'] for u in response.data] == ['zed@example.com']

    def test_short_query_returns_nothing(self, authenticated_client, user):
        User.objects.create_user(email='zed@example.com', password='TestPass123!')
        response = authenticated_client.get(reverse('users:user-search'), {'q': 'z'})

        assert response.data == []

    def test_excludes_self_and_inactive(self, authenticated_client, user, user_inactive):
        response = authenticated_client.get(reverse('users:user-search'), {'q': 'example'})

        assert response.data == []


@pytest.mark.django_db
class TestMyOrders:
    """Tests for GET /api/auth/user/orders/"""

    def test_no_groups_no_orders(self, authenticated_client):
        response = authenticated_client.get(reverse('users:my-orders'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
