import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from accounts.core.settings import Settings


class AdminAuth(AuthenticationBackend):
    """SQLAdmin login against the configured admin credentials."""

    def __init__(self, settings: Settings) -> None:
        # SQLAdmin installs a session middleware signed with this secret.
        super().__init__(secret_key=settings.session_secret_key)
        self.settings = settings

    def check_credentials(self, username: str, password: str) -> bool:
        username_ok = secrets.compare_digest(
            username.strip().encode(), self.settings.admin_username.encode()
        )
        password_ok = secrets.compare_digest(
            password.encode(), self.settings.admin_password.encode()
        )
        return username_ok and password_ok

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", ""))
        password = str(form.get("password", ""))

        if not self.check_credentials(username, password):
            return False
        request.session["admin_user"] = username.strip()
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("admin_user"))
