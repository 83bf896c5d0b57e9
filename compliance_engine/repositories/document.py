"""Vendor document repository."""

from __future__ import annotations

from collections.abc import Iterable

from compliance_engine.domain.document import VendorDocument
from compliance_engine.domain.vendor import Vendor
from compliance_engine.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[VendorDocument]):
    model = VendorDocument

    async def list_expiry_tracked(self, doc_types: Iterable[str]) -> list[VendorDocument]:
        """Documents of the given types that carry an expiry date, with their vendor loaded.

        Ordered by vendor then expiry so evaluation order is stable between runs.
        """
        q = (
            self._scoped()
            .join(VendorDocument.vendor)
            .where(VendorDocument.doc_type.in_(list(doc_types)))
            .where(VendorDocument.expiry_date.is_not(None))
            .where(Vendor.deleted_at.is_(None))
            .order_by(VendorDocument.vendor_id, VendorDocument.expiry_date.asc())
        )
        result = await self._session.execute(q)
        return list(result.scalars().unique().all())
