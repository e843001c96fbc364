"""Tests for accounts/admin - SQLAdmin authentication and views."""

from unittest.mock import MagicMock

import pytest

from accounts.admin.auth import AdminAuth
from accounts.admin.views import UserAdmin, UserProfileAdmin
from accounts.core.settings import get_settings


@pytest.fixture
def admin_auth():
    return AdminAuth(get_settings())


@pytest.fixture
def mock_request():
    request = MagicMock()
    request.session = {}
    return request


def with_form(request, form: dict):
    async def mock_form():
        return form

    request.form = mock_form
    return request


@pytest.mark.asyncio
async def test_admin_login_success(admin_auth, mock_request):
    settings = get_settings()
    with_form(
        mock_request,
        {"username": f"  {settings.admin_username} ", "password": settings.admin_password},
    )

    result = await admin_auth.login(mock_request)

    assert result is True
    assert mock_request.session["admin_user"] == settings.admin_username


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "password"),
    [("wrong-user", None), (None, "wrong-password"), ("", "")],
)
async def test_admin_login_rejected(admin_auth, mock_request, username, password):
    settings = get_settings()
    with_form(
        mock_request,
        {
            "username": settings.admin_username if username is None else username,
            "password": settings.admin_password if password is None else password,
        },
    )

    result = await admin_auth.login(mock_request)

    assert result is False
    assert "admin_user" not in mock_request.session


@pytest.mark.asyncio
async def test_admin_logout(admin_auth, mock_request):
    mock_request.session["admin_user"] = "admin"

    result = await admin_auth.logout(mock_request)

    assert result is True
    assert mock_request.session == {}


@pytest.mark.asyncio
async def test_admin_authenticate(admin_auth, mock_request):
    assert await admin_auth.authenticate(mock_request) is False

    mock_request.session["admin_user"] = "admin"

    assert await admin_auth.authenticate(mock_request) is True


def test_admin_views_never_create_or_delete():
    for view in (UserAdmin, UserProfileAdmin):
        assert view.can_create is False
        assert view.can_delete is False


def test_user_admin_hides_password():
    def keys(columns):
        return {column.key for column in columns}

    assert "password" not in keys(UserAdmin.column_list)
    assert "password" in keys(UserAdmin.form_excluded_columns)
    assert "password" in keys(UserAdmin.column_details_exclude_list)


def test_admin_forms_leave_email_and_deletion_to_the_api():
    def keys(columns):
        return {column.key for column in columns}

    assert {"username", "email", "deleted_at"} <= keys(UserAdmin.form_excluded_columns)
    assert "deleted_at" in keys(UserProfileAdmin.form_excluded_columns)
