"""Centralized dependency type aliases for FastAPI routes.

Import dependencies from this single module:
    from accounts.core.deps import SessionDep, PasswordHasherDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from accounts.core.security import PasswordHasher, get_password_hasher
from accounts.db.engine import get_session

# Database session (one per request)
SessionDep = Annotated[Session, Depends(get_session)]

# Password hashing
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
