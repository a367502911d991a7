"""Password hashing interface."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way salted password hashing."""

    @abstractmethod
    def hash(self, raw_password: str) -> str:
        """Hash a raw password with a fresh salt."""
        pass

    @abstractmethod
    def verify(self, raw_password: str, hashed: str) -> bool:
        """Check a raw password against a stored hash."""
        pass

    @abstractmethod
    def verify_dummy(self, raw_password: str) -> None:
        """Spend the same time as ``verify`` without a stored hash.

        Called when the login handle is unknown, so that response time does
        not reveal whether the handle exists.
        """
        pass

    @abstractmethod
    def unusable_hash(self) -> str:
        """Hash of a random secret nobody knows, for social-only identities."""
        pass
