from datetime import UTC, datetime
from typing import Annotated

from pydantic.functional_serializers import PlainSerializer


def ensure_utc(v: datetime) -> datetime:
    """Treat naive datetimes (as returned by some drivers) as UTC."""
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v.astimezone(UTC)


def _serialize_utc_datetime(v: datetime | None) -> str | None:
    if v is None:
        return None
    return ensure_utc(v).isoformat()


UTCDatetime = Annotated[datetime, PlainSerializer(_serialize_utc_datetime)]


def clamp_to_now(v: datetime | None) -> datetime:
    """Client-supplied timestamp as UTC, never later than the server clock."""
    now = datetime.now(UTC)
    if v is None:
        return now
    return min(ensure_utc(v), now)
