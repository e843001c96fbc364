"""Password hashing.

Hashing is always an explicit call made by the user workflows; models never
hash implicitly on save.
"""

from functools import lru_cache

from passlib.context import CryptContext

from accounts.core.settings import get_settings


class PasswordHasher:
    """Salted, work-factor based password hashing (bcrypt via passlib)."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        """Hash ``plaintext`` with a fresh random salt."""
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check ``plaintext`` against a stored digest.

        Unrecognised or malformed digests never verify.
        """
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            return False


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().password_hash_rounds)
