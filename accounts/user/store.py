"""Persistence boundary for users and their profiles.

``UserStore`` wraps a request-scoped SQLModel session. Ordinary reads skip
soft-deleted rows unless ``include_deleted`` is set. Existence predicates
always look at every row, soft-deleted ones included, because the unique
constraints on ``users`` do too.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlmodel import Session, select

from accounts.user.models import User, UserProfile


class UserStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    # --- Existence ---

    def username_exists(self, username: str) -> bool:
        statement = select(User.id).where(User.username == username)
        return self.session.exec(statement).first() is not None

    def email_exists(self, email: str, *, exclude_user_id: int | None = None) -> bool:
        statement = select(User.id).where(User.email == email)
        if exclude_user_id is not None:
            statement = statement.where(User.id != exclude_user_id)
        return self.session.exec(statement).first() is not None

    # --- Reads ---

    def get_user(self, user_id: int, *, include_deleted: bool = False) -> User | None:
        statement = select(User).where(User.id == user_id)
        if not include_deleted:
            statement = statement.where(User.deleted_at.is_(None))  # type: ignore[union-attr]
        return self.session.exec(statement).first()

    def list_users(self, *, include_deleted: bool = False) -> Sequence[User]:
        statement = select(User).order_by(User.id)  # type: ignore[arg-type]
        if not include_deleted:
            statement = statement.where(User.deleted_at.is_(None))  # type: ignore[union-attr]
        return self.session.exec(statement).all()

    def get_profile(
        self, user_id: int, *, include_deleted: bool = False
    ) -> UserProfile | None:
        statement = select(UserProfile).where(UserProfile.user_id == user_id)
        if not include_deleted:
            statement = statement.where(UserProfile.deleted_at.is_(None))  # type: ignore[union-attr]
        return self.session.exec(statement).first()

    # --- Writes (call inside ``transaction()``) ---

    def add_user(self, user: User) -> User:
        """Stage ``user`` and flush so its generated id is available."""
        self.session.add(user)
        self.session.flush()
        return user

    def add_profile(self, profile: UserProfile) -> UserProfile:
        self.session.add(profile)
        self.session.flush()
        return profile

    def save(self, *rows: User | UserProfile) -> None:
        self.session.add_all(rows)
        self.session.flush()

    def delete(self, *rows: User | UserProfile) -> None:
        for row in rows:
            self.session.delete(row)
        self.session.flush()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Commit on success; roll back and re-raise on any exception."""
        try:
            yield self.session
            self.session.commit()
        except BaseException:
            self.session.rollback()
            raise

    def refresh(self, *rows: User | UserProfile) -> None:
        for row in rows:
            self.session.refresh(row)
