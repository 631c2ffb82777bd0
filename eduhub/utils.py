from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite drops tzinfo so everything is stored naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def day_bounds(value: date | datetime) -> tuple[datetime, datetime]:
    """Half-open window [00:00:00, 23:59:59.999) for the given calendar day."""
    start = start_of_day(value)
    return start, start + timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


def full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"
