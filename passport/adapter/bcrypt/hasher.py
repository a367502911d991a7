"""bcrypt password hasher."""

import secrets

import bcrypt

from passport.domain.service.password import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """PasswordHasher backed by bcrypt.

    bcrypt only looks at the first 72 bytes of a password; longer inputs are
    truncated consistently on hash and verify.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor (log2 of iterations)
        """
        self.rounds = rounds
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    @staticmethod
    def _encode(raw_password: str) -> bytes:
        return raw_password.encode("utf-8")[:72]

    def hash(self, raw_password: str) -> str:
        hashed = bcrypt.hashpw(self._encode(raw_password), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, raw_password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(raw_password), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def verify_dummy(self, raw_password: str) -> None:
        bcrypt.checkpw(self._encode(raw_password), self._dummy_hash.encode("utf-8"))

    def unusable_hash(self) -> str:
        return self.hash(secrets.token_urlsafe(32))
