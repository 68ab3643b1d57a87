# theater/utils.py
from datetime import datetime

from django.conf import settings
from django.utils import timezone


def format_price(amount) -> str:
    """Render a whole-unit price with the configured currency suffix: ``450 RUB``."""
    return f"{amount} {settings.CINEMA_CURRENCY_SUFFIX}"


def format_duration(minutes) -> str:
    """``181`` -> ``"3 h 1 m"``, ``45`` -> ``"45 m"``."""
    if minutes is None:
        return ""
    hours, rest = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours} h {rest} m"
    return f"{rest} m"


def format_timestamp(value: datetime | None) -> str:
    """ISO timestamp in local time with the ``T`` separator swapped for a space."""
    if value is None:
        return ""
    if timezone.is_aware(value):
        value = timezone.localtime(value).replace(tzinfo=None)
    return value.isoformat(timespec="seconds").replace("T", " ")
