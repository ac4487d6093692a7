"""
Owner-scoped CRUD operations.

Every user-facing document (chats, quizzes, study plans, notes) is only
visible to its owner. These helpers add the owner predicate to every
lookup, update and delete.

Dependencies: sqlalchemy, studybuddy.boundary.db.CRUD.base_crud
System role: Owner isolation for document stores
"""

from typing import Any, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.base import Base
from studybuddy.boundary.db.CRUD.base_crud import BaseCRUD

OwnedModelT = TypeVar("OwnedModelT", bound=Base)


class OwnedCRUD(BaseCRUD[OwnedModelT]):
    """BaseCRUD whose read/write helpers are filtered by ``owner_id``."""

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> OwnedModelT | None:
        """
        Retrieve a record by id if it belongs to owner_id.

        Returns:
            Model instance, or None when missing or owned by someone else
        """
        stmt = select(self.model).where(
            self.model.id == id,
            self.model.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[OwnedModelT]:
        """
        List an owner's records, newest first.

        Returns:
            Sequence of model instances ordered by created_at descending
        """
        stmt = (
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def create_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        **kwargs: Any,
    ) -> OwnedModelT:
        """Create a record owned by owner_id."""
        return await self.create(session, owner_id=owner_id, **kwargs)

    async def update_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
        **kwargs: Any,
    ) -> OwnedModelT | None:
        """
        Update an owner's record.

        Returns:
            Updated instance, or None when the id does not resolve for this owner
        """
        instance = await self.get_for_owner(session, id, owner_id)
        if instance is None:
            return None
        return await self.apply_updates(session, instance, **kwargs)

    async def delete_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> bool:
        """
        Delete an owner's record.

        Returns:
            True if a row was deleted, False if not found for this owner
        """
        stmt = delete(self.model).where(
            self.model.id == id,
            self.model.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0
