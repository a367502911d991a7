"""Normalization of raw provider attributes into a SocialProfile.

Each supported provider has one pure function turning the user-info
document its OAuth handshake returns into the common profile shape. The
registry is keyed by provider, and lookup is by the provider key given at
the start of the OAuth callback.
"""

from collections.abc import Callable, Mapping
from typing import Any

from passport.domain.error import InvalidArgumentError, UnsupportedProviderError
from passport.domain.value import SocialProfile, SocialProvider

Attributes = Mapping[str, Any]
Normalizer = Callable[[Attributes], SocialProfile]

PLACEHOLDER_NAMES: dict[SocialProvider, str] = {
    SocialProvider.KAKAO: "Kakao User",
    SocialProvider.GOOGLE: "Google User",
    SocialProvider.NAVER: "Naver User",
}


def _section(attributes: Attributes, key: str) -> Attributes:
    value = attributes.get(key)
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build(
    provider: SocialProvider, provider_user_id: Any, email: Any, name: Any
) -> SocialProfile:
    user_id = _text(provider_user_id)
    if user_id is None:
        raise InvalidArgumentError(f"{provider.value} profile has no user id")
    return SocialProfile(
        provider=provider,
        provider_user_id=user_id,
        email=_text(email),
        display_name=_text(name) or PLACEHOLDER_NAMES[provider],
    )


def normalize_kakao(attributes: Attributes) -> SocialProfile:
    """Kakao: numeric ``id``; email and nickname under ``kakao_account``."""
    account = _section(attributes, "kakao_account")
    profile = _section(account, "profile")
    return _build(
        SocialProvider.KAKAO,
        attributes.get("id"),
        account.get("email"),
        profile.get("nickname"),
    )


def normalize_google(attributes: Attributes) -> SocialProfile:
    """Google (OpenID Connect): ``sub``, ``email`` and ``name`` at top level."""
    return _build(
        SocialProvider.GOOGLE,
        attributes.get("sub"),
        attributes.get("email"),
        attributes.get("name"),
    )


def normalize_naver(attributes: Attributes) -> SocialProfile:
    """Naver: everything is wrapped in a ``response`` object."""
    response = _section(attributes, "response")
    return _build(
        SocialProvider.NAVER,
        response.get("id"),
        response.get("email"),
        response.get("nickname"),
    )


NORMALIZERS: dict[SocialProvider, Normalizer] = {
    SocialProvider.KAKAO: normalize_kakao,
    SocialProvider.GOOGLE: normalize_google,
    SocialProvider.NAVER: normalize_naver,
}


def parse_provider(provider_key: str) -> SocialProvider:
    """Resolve a provider key case-insensitively.

    Raises:
        UnsupportedProviderError: If no provider has that key
    """
    try:
        return SocialProvider(provider_key.strip().lower())
    except ValueError:
        raise UnsupportedProviderError(provider_key)


def normalize_profile(
    provider: SocialProvider | str, attributes: Attributes
) -> SocialProfile:
    """Normalize raw provider attributes.

    Args:
        provider: Provider enum or its key
        attributes: User-info document from the provider

    Returns:
        The normalized profile

    Raises:
        UnsupportedProviderError: If the provider is not supported
        InvalidArgumentError: If the attributes carry no user id
    """
    if not isinstance(provider, SocialProvider):
        provider = parse_provider(provider)
    normalizer = NORMALIZERS.get(provider)
    if normalizer is None:
        raise UnsupportedProviderError(provider.value)
    return normalizer(attributes)
