"""Wall-clock helpers bound to the configured local timezone."""

from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from fintrack.config import settings

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current time as an aware datetime in the configured timezone."""
    return datetime.now(ZoneInfo(settings.timezone))
