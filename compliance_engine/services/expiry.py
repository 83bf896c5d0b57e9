"""Document expiry classification."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class ExpiryState(str, Enum):
    EXPIRED = "EXPIRED"
    EXPIRING_SOON = "EXPIRING_SOON"
    OK = "OK"


def as_utc(value: datetime | date | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        # Naive values are UTC: UTCDateTime columns normalise on write
        return value.replace(tzinfo=timezone.utc)
    return value


def classify_expiry(
    expiry_date: datetime | date | str,
    now: datetime,
    window: timedelta = timedelta(days=30),
) -> ExpiryState:
    """Classify a document's expiry against the run's reference time.

    EXPIRED when ``expiry_date < now``, EXPIRING_SOON when it falls in
    ``(now, now + window]``, OK otherwise. Values that cannot be read as a
    date are OK: a bad date never blocks a vendor.
    """
    try:
        expiry = as_utc(expiry_date)
        remaining = expiry - as_utc(now)
    except (TypeError, ValueError):
        logger.debug("Unreadable expiry date %r treated as OK", expiry_date)
        return ExpiryState.OK

    if remaining < timedelta(0):
        return ExpiryState.EXPIRED
    if timedelta(0) < remaining <= window:
        return ExpiryState.EXPIRING_SOON
    return ExpiryState.OK
