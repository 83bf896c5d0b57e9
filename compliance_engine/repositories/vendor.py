"""Vendor repository — status queries and the guarded status transition."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import update

from compliance_engine.domain.mixins import utcnow
from compliance_engine.domain.vendor import Vendor
from compliance_engine.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    async def list_in_status_created_before(
        self, status: str, created_before: datetime
    ) -> list[Vendor]:
        """Vendors sitting in ``status`` whose record was created before the cutoff."""
        q = (
            self._scoped()
            .where(Vendor.status == status)
            .where(Vendor.created_at < created_before)
            .order_by(Vendor.created_at.asc())
        )
        result = await self._session.execute(q)
        return list(result.scalars().all())

    async def transition_status(
        self,
        vendor_id: str,
        *,
        expected_status: str,
        new_status: str,
        review_notes: str,
    ) -> bool:
        """Move a vendor from ``expected_status`` to ``new_status``.

        The update only matches while the row still holds ``expected_status``,
        so a status changed by a reviewer since it was read is left alone.
        Returns False when no row was updated.
        """
        result = await self._session.execute(
            update(Vendor)
            .where(Vendor.id == vendor_id)
            .where(Vendor.client_id == self._client_id)
            .where(Vendor.status == expected_status)
            .values(status=new_status, review_notes=review_notes, updated_at=utcnow())
        )
        await self._session.flush()
        return result.rowcount > 0
