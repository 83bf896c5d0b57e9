"""User repository — reviewer directory lookups."""

from __future__ import annotations

from compliance_engine.domain.user import User
from compliance_engine.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def first_active_with_role(self, role: str) -> User | None:
        result = await self._session.execute(
            self._scoped()
            .where(User.role == role)
            .where(User.is_active.is_(True))
            .order_by(User.created_at.asc())
            .limit(1)
        )
        return result.scalars().first()
