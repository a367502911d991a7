"""Login handle generation for social identities."""

import secrets
import string

from passport.domain.value import SocialProvider

_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 6


def generate_social_handle(provider: SocialProvider) -> str:
    """Generate ``<provider>_<6 random lowercase alphanumerics>``."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{provider.value}_{suffix}".lower()
