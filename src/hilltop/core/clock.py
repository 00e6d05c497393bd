"""UTC clock helpers shared by the models and services."""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def later_than(previous: datetime | None) -> datetime:
    """
    Current UTC time, nudged forward if needed so it is strictly after ``previous``.

    Coarse system clocks can return the same value for two calls in a row;
    ``updated_at`` must still move forward on every write.
    """
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def to_utc_z(dt: datetime, timespec: str = "milliseconds") -> str:
    """ISO 8601 string with a ``Z`` suffix. Naive values are taken as UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat(timespec=timespec) + "Z"
