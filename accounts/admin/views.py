from sqladmin import ModelView

from accounts.user.models import User, UserProfile


class UserAdmin(ModelView, model=User):
    """Read/edit users.

    Identity fields and the soft-delete marker are read-only here; changes to
    them go through the API workflows.
    """

    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    can_create = False
    can_delete = False

    column_list = [
        User.id,
        User.username,
        User.email,
        User.role,
        User.status,
        User.last_login,
        User.created_at,
        User.updated_at,
        User.deleted_at,
    ]
    column_details_exclude_list = [User.password]
    form_excluded_columns = [
        User.username,
        User.email,
        User.password,
        User.deleted_at,
        User.created_at,
        User.updated_at,
    ]

    column_searchable_list = [User.username, User.email]
    column_sortable_list = [
        User.id,
        User.username,
        User.email,
        User.role,
        User.status,
        User.created_at,
    ]


class UserProfileAdmin(ModelView, model=UserProfile):
    name = "Profile"
    name_plural = "Profiles"
    icon = "fa-solid fa-id-card"

    can_create = False
    can_delete = False

    column_list = [
        UserProfile.id,
        UserProfile.user_id,
        UserProfile.full_name,
        UserProfile.city,
        UserProfile.country,
        UserProfile.deleted_at,
    ]
    form_excluded_columns = [
        UserProfile.user_id,
        UserProfile.created_at,
        UserProfile.updated_at,
        UserProfile.deleted_at,
    ]
    column_searchable_list = [UserProfile.full_name, UserProfile.city]
