"""User workflows.

``UserService`` owns the ordered steps behind every user operation. The
creation workflow runs:

1. (request schema validation happens before the service is called)
2. username, then email, existence checks
3. explicit password hashing
4. one transaction inserting the user row and then its profile row
5. commit, or rollback if anything in step 4 fails

Either both rows become visible together or neither does. Unique
constraint violations that slip past step 2 under concurrent requests are
reported as the same conflict failures.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accounts.core.exceptions import persistence_failure
from accounts.core.mixins import utc_now
from accounts.core.security import PasswordHasher
from accounts.user.exceptions import (
    conflict_from_integrity_error,
    email_exists,
    user_not_found,
    username_exists,
)
from accounts.user.models import User, UserProfile
from accounts.user.schemas import UserCreate, UserUpdate
from accounts.user.store import UserStore

logger = logging.getLogger("accounts.user")


class UserService:
    def __init__(self, store: UserStore, hasher: PasswordHasher) -> None:
        self.store = store
        self.hasher = hasher

    # --- Existence checks ---

    def username_exists(self, username: str) -> bool:
        return self.store.username_exists(username)

    def email_exists(self, email: str) -> bool:
        return self.store.email_exists(email)

    # --- Creation workflow ---

    def create_user(self, payload: UserCreate) -> tuple[User, UserProfile]:
        """Create a user and its profile atomically.

        Raises:
            AppException: conflict if username or email is taken, persistence
                failure if the store rejects the insert for another reason.
        """
        if self.store.username_exists(payload.username):
            raise username_exists()
        if self.store.email_exists(payload.email):
            raise email_exists()

        password_hash = self.hasher.hash(payload.password)

        user = User(
            username=payload.username,
            email=payload.email,
            password=password_hash,
            role=payload.role,
            status=payload.status,
            last_login=payload.last_login,
        )
        try:
            with self.store.transaction():
                self.store.add_user(user)
                profile = UserProfile(user_id=user.id, **payload.profile.model_dump())
                self.store.add_profile(profile)
        except IntegrityError as exc:
            failure = conflict_from_integrity_error(exc)
            logger.info(
                "Unique constraint rejected new user %r: %s",
                payload.username,
                failure.error_type,
                extra={"error_type": failure.error_type},
            )
            raise failure from exc
        except SQLAlchemyError as exc:
            logger.exception(
                "Failed to create user and profile for %r", payload.username
            )
            raise persistence_failure("Failed to create user and profile") from exc

        self.store.refresh(user, profile)
        logger.info("Created user %s", user.id, extra={"user_id": user.id})
        return user, profile

    # --- Reads ---

    def list_users(self, *, include_deleted: bool = False) -> Sequence[User]:
        return self.store.list_users(include_deleted=include_deleted)

    def get_user(self, user_id: int, *, include_deleted: bool = False) -> User:
        user = self.store.get_user(user_id, include_deleted=include_deleted)
        if user is None:
            raise user_not_found()
        return user

    def get_user_with_profile(self, user_id: int) -> tuple[User, UserProfile | None]:
        user = self.get_user(user_id)
        return user, self.store.get_profile(user_id)

    # --- Update ---

    def update_user(self, user_id: int, payload: UserUpdate) -> User:
        """Apply a partial update to user fields.

        Username changes are rejected by the caller before validation; the
        update schema does not carry that field.
        """
        user = self.get_user(user_id)
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            return user

        if "email" in changes and changes["email"] != user.email:
            if self.store.email_exists(changes["email"], exclude_user_id=user_id):
                raise email_exists("Email already in use")
        if "password" in changes:
            changes["password"] = self.hasher.hash(changes["password"])

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            with self.store.transaction():
                self.store.save(user)
        except IntegrityError as exc:
            raise conflict_from_integrity_error(exc) from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to update user %s", user_id)
            raise persistence_failure("Failed to update user") from exc

        self.store.refresh(user)
        logger.info(
            "Updated user %s (%s)",
            user_id,
            ", ".join(sorted(changes)),
            extra={"user_id": user_id},
        )
        return user

    # --- Deletion ---

    def soft_delete_user(self, user_id: int) -> User:
        """Mark a live user and its profile as deleted in one transaction."""
        user = self.get_user(user_id)
        profile = self.store.get_profile(user_id)
        deleted_at = utc_now()

        rows: list[User | UserProfile] = [user]
        if profile is not None:
            rows.append(profile)
        for row in rows:
            row.deleted_at = deleted_at
        try:
            with self.store.transaction():
                self.store.save(*rows)
        except SQLAlchemyError as exc:
            logger.exception("Failed to soft delete user %s", user_id)
            raise persistence_failure("Failed to delete user") from exc

        self.store.refresh(user)
        logger.info("Soft deleted user %s", user_id, extra={"user_id": user_id})
        return user

    def restore_user(self, user_id: int) -> User:
        """Clear the soft-delete marker on a user and its profile."""
        user = self.store.get_user(user_id, include_deleted=True)
        if user is None or not user.is_deleted:
            raise user_not_found("Deleted user not found")
        profile = self.store.get_profile(user_id, include_deleted=True)

        rows: list[User | UserProfile] = [user]
        if profile is not None:
            rows.append(profile)
        for row in rows:
            row.deleted_at = None
        try:
            with self.store.transaction():
                self.store.save(*rows)
        except SQLAlchemyError as exc:
            logger.exception("Failed to restore user %s", user_id)
            raise persistence_failure("Failed to restore user") from exc

        self.store.refresh(user)
        logger.info("Restored user %s", user_id, extra={"user_id": user_id})
        return user

    def force_delete_user(self, user_id: int) -> None:
        """Permanently remove a user and its profile, soft-deleted or not."""
        user = self.store.get_user(user_id, include_deleted=True)
        if user is None:
            raise user_not_found()
        profile = self.store.get_profile(user_id, include_deleted=True)
        try:
            with self.store.transaction():
                if profile is not None:
                    self.store.delete(profile)
                self.store.delete(user)
        except SQLAlchemyError as exc:
            logger.exception("Failed to force delete user %s", user_id)
            raise persistence_failure("Failed to delete user") from exc

        logger.info("Force deleted user %s", user_id, extra={"user_id": user_id})
