"""User domain dependencies."""

from typing import Annotated

from fastapi import Depends

from accounts.core.deps import PasswordHasherDep, SessionDep
from accounts.user.service import UserService
from accounts.user.store import UserStore


def get_user_service(session: SessionDep, hasher: PasswordHasherDep) -> UserService:
    """Build the user service around the request's session."""
    return UserService(UserStore(session), hasher)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
