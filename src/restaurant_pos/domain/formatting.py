from datetime import datetime, timezone
from typing import Optional, Union

INVALID_DATE = "Invalid date"


def _as_utc(value: datetime) -> datetime:
    # sqlite отдаёт naive datetime, считаем его UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def describe_age(value: Union[datetime, str, None], now: Optional[datetime] = None) -> str:
    """
    "5 minutes ago" для карточки заказа на кухне.
    Нераспознанная дата не ломает ответ, а превращается в "Invalid date".
    """
    try:
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if not isinstance(value, datetime):
            return INVALID_DATE
        moment = _as_utc(value)
    except ValueError:
        return INVALID_DATE

    now = _as_utc(now or datetime.now(timezone.utc))
    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now"
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            amount = seconds // size
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
    return "just now"
