"""PostgreSQL implementation of Identity repository."""

from typing import Optional

import logfire
from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from passport.domain.error import (
    DuplicateHandleError,
    DuplicateSocialLinkError,
    StaleIdentityError,
)
from passport.domain.model import Identity
from passport.domain.repository import IdentityRepository
from passport.domain.value import AdvisorStatus, IdentityId, LoginHandle, SocialProvider
from passport.persistence.mappers import (
    identity_to_dict,
    row_to_identity,
    social_link_to_dict,
)
from passport.persistence.tables import (
    HANDLE_CONSTRAINT,
    SOCIAL_LINK_CONSTRAINT,
    identities_table,
    social_links_table,
)


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _live(self) -> Select:
        return select(identities_table).where(
            identities_table.c.deleted_at.is_(None),
            identities_table.c.account_status != "DELETED",
        )

    async def _load_many(self, stmt: Select) -> list[Identity]:
        result = await self.session.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            return []

        link_stmt = select(social_links_table).where(
            social_links_table.c.identity_id.in_([row["id"] for row in rows])
        )
        link_result = await self.session.execute(link_stmt)
        links: dict = {}
        for link in link_result.mappings().all():
            links.setdefault(link["identity_id"], []).append(dict(link))

        return [row_to_identity(row, links.get(row["id"], [])) for row in rows]

    async def _load_one(self, stmt: Select) -> Optional[Identity]:
        identities = await self._load_many(stmt.limit(1))
        return identities[0] if identities else None

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: Identity ID to look up

        Returns:
            Identity if found, None otherwise
        """
        return await self._load_one(
            self._live().where(identities_table.c.id == identity_id)
        )

    async def find_by_handle(self, login_handle: LoginHandle) -> Optional[Identity]:
        """Find an identity by login handle.

        Args:
            login_handle: Handle to search for

        Returns:
            Identity if found, None otherwise
        """
        return await self._load_one(
            self._live().where(identities_table.c.login_handle == login_handle.root)
        )

    async def find_by_social_link(
        self, provider: SocialProvider, provider_user_id: str
    ) -> Optional[Identity]:
        """Find the identity a social account is linked to.

        Args:
            provider: Social login provider
            provider_user_id: The account's ID on that provider

        Returns:
            Identity if found, None otherwise
        """
        linked = (
            select(social_links_table.c.identity_id)
            .where(social_links_table.c.provider == provider.value)
            .where(social_links_table.c.provider_user_id == provider_user_id)
        )
        return await self._load_one(
            self._live().where(identities_table.c.id.in_(linked))
        )

    async def find_by_advisor_status(self, status: AdvisorStatus) -> list[Identity]:
        stmt = (
            self._live()
            .where(identities_table.c.advisor_status == status.value)
            .order_by(identities_table.c.created_at)
        )
        return await self._load_many(stmt)

    async def list(self, offset: int = 0, limit: int = 20) -> list[Identity]:
        stmt = (
            self._live()
            .order_by(identities_table.c.created_at, identities_table.c.id)
            .offset(offset)
            .limit(limit)
        )
        return await self._load_many(stmt)

    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        Runs inside a savepoint so a constraint violation leaves the request
        transaction usable.

        Args:
            identity: Identity to save

        Returns:
            Saved identity with its version incremented

        Raises:
            DuplicateHandleError: If the login handle is taken
            DuplicateSocialLinkError: If a social link belongs to another identity
            StaleIdentityError: If the stored version differs
        """
        exists_stmt = select(identities_table.c.id).where(
            identities_table.c.id == identity.id
        )
        exists = (await self.session.execute(exists_stmt)).first() is not None

        saved = identity.model_copy(update={"version": identity.version + 1})
        try:
            async with self.session.begin_nested():
                if exists:
                    await self._update(identity, saved)
                else:
                    await self.session.execute(
                        insert(identities_table).values(**identity_to_dict(saved))
                    )
                await self._sync_links(saved)
        except IntegrityError as e:
            raise self._translate(e, identity) from e

        return saved

    async def _update(self, identity: Identity, saved: Identity) -> None:
        values = identity_to_dict(saved)
        del values["id"]
        del values["created_at"]
        stmt = (
            update(identities_table)
            .where(identities_table.c.id == identity.id)
            .where(identities_table.c.version == identity.version)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            logfire.warn(
                "Optimistic lock failed",
                identity_id=str(identity.id),
                expected_version=identity.version,
            )
            raise StaleIdentityError(str(identity.id), identity.version)

    async def _sync_links(self, identity: Identity) -> None:
        stmt = select(
            social_links_table.c.provider, social_links_table.c.provider_user_id
        ).where(social_links_table.c.identity_id == identity.id)
        stored = {
            (row.provider, row.provider_user_id)
            for row in (await self.session.execute(stmt)).all()
        }
        wanted = {
            (link.provider.value, link.provider_user_id): link
            for link in identity.linked_social_accounts
        }

        for provider, provider_user_id in stored - wanted.keys():
            await self.session.execute(
                delete(social_links_table)
                .where(social_links_table.c.identity_id == identity.id)
                .where(social_links_table.c.provider == provider)
                .where(social_links_table.c.provider_user_id == provider_user_id)
            )
        missing = [
            social_link_to_dict(identity.id, link)
            for key, link in wanted.items()
            if key not in stored
        ]
        if missing:
            await self.session.execute(insert(social_links_table), missing)

    @staticmethod
    def _translate(error: IntegrityError, identity: Identity) -> Exception:
        message = str(error.orig)
        if SOCIAL_LINK_CONSTRAINT in message:
            link = next(iter(identity.linked_social_accounts))
            return DuplicateSocialLinkError(link.provider.value, link.provider_user_id)
        if HANDLE_CONSTRAINT in message:
            return DuplicateHandleError(identity.login_handle.root)
        return error
