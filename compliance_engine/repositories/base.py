"""Tenant-scoped async repository base."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.pagination import PaginationParams
from compliance_engine.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Every read goes through ``_scoped()``: the caller's client_id only,
    soft-deleted rows hidden. The engine itself never deletes rows.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession, client_id: str):
        self._session = session
        self._client_id = client_id

    def _scoped(self) -> Select:
        q = select(self.model).where(self.model.client_id == self._client_id)
        if hasattr(self.model, "deleted_at"):
            q = q.where(self.model.deleted_at.is_(None))
        return q

    async def page(
        self,
        pagination: PaginationParams,
        **equals: Any,
    ) -> tuple[list[ModelT], int]:
        """One page of rows plus the unpaged total.

        ``equals`` are column == value filters; ``None`` values are ignored.
        """
        q = self._scoped()
        for column, value in equals.items():
            if value is not None:
                q = q.where(getattr(self.model, column) == value)

        total = (
            await self._session.execute(select(func.count()).select_from(q.subquery()))
        ).scalar_one()

        sort_col = getattr(self.model, pagination.sort)
        q = q.order_by(sort_col.desc() if pagination.order == "desc" else sort_col.asc())
        q = q.offset(pagination.offset).limit(pagination.limit)

        rows = (await self._session.execute(q)).scalars().all()
        return list(rows), total

    async def add(self, **values: Any) -> ModelT:
        instance = self.model(client_id=self._client_id, **values)
        self._session.add(instance)
        await self._session.flush()
        return instance
