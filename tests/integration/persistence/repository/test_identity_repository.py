"""Integration tests for PostgresIdentityRepository.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... python scripts/run_migrations.py
    DATABASE__URL=postgresql+asyncpg://... pytest tests/integration
"""

import os
from uuid import uuid4

import pytest

from passport.domain.error import (
    DuplicateHandleError,
    DuplicateSocialLinkError,
    StaleIdentityError,
)
from passport.domain.model import AdvisorProfile
from passport.domain.repository import IdentityRepository
from passport.domain.value import AdvisorStatus, LoginHandle, SocialProvider
from tests.conftest import make_identity
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def unique_handle(prefix: str = "it") -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


class TestIdentityRepositoryIntegration:
    """Integration tests for PostgresIdentityRepository."""

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, integration_env):
        """Every field, links and profile included, should survive a save."""
        repo = await integration_env.get(IdentityRepository)
        user_id = uuid4().hex
        identity = make_identity(
            login_handle=unique_handle(),
            contact_id="it#1",
            advisor_status=AdvisorStatus.PENDING,
            points=42,
            links=[(SocialProvider.GOOGLE, user_id, "it@google.example")],
            profile=AdvisorProfile(main_category="tax", intro="hi", career_years=3),
        )

        saved = await repo.save(identity)
        loaded = await repo.find_by_id(identity.id)

        assert saved.version == 1
        assert loaded is not None
        assert loaded.login_handle == identity.login_handle
        assert loaded.points == 42
        assert loaded.profile == identity.profile
        assert loaded.linked_social_accounts == identity.linked_social_accounts
        [link] = loaded.linked_social_accounts
        assert link.email == "it@google.example"

        by_link = await repo.find_by_social_link(SocialProvider.GOOGLE, user_id)
        assert by_link.id == identity.id
        by_handle = await repo.find_by_handle(LoginHandle(str(identity.login_handle)))
        assert by_handle.id == identity.id

    @pytest.mark.asyncio
    async def test_stale_version_rejected(self, integration_env):
        repo = await integration_env.get(IdentityRepository)
        saved = await repo.save(make_identity(login_handle=unique_handle()))
        await repo.save(saved.model_copy(update={"points": 1}))

        with pytest.raises(StaleIdentityError):
            await repo.save(saved.model_copy(update={"points": 2}))

        assert (await repo.find_by_id(saved.id)).points == 1

    @pytest.mark.asyncio
    async def test_duplicate_handle_translated(self, integration_env):
        repo = await integration_env.get(IdentityRepository)
        handle = unique_handle()
        await repo.save(make_identity(login_handle=handle))

        with pytest.raises(DuplicateHandleError):
            await repo.save(make_identity(login_handle=handle))

        # The savepoint keeps the session usable
        assert await repo.find_by_handle(LoginHandle(handle)) is not None

    @pytest.mark.asyncio
    async def test_duplicate_social_link_translated(self, integration_env):
        repo = await integration_env.get(IdentityRepository)
        user_id = uuid4().hex
        await repo.save(
            make_identity(
                login_handle=unique_handle(),
                links=[(SocialProvider.KAKAO, user_id, None)],
            )
        )

        with pytest.raises(DuplicateSocialLinkError):
            await repo.save(
                make_identity(
                    login_handle=unique_handle(),
                    links=[(SocialProvider.KAKAO, user_id, None)],
                )
            )
