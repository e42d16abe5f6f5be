# Area: Session
"""
wordleoff._session.clock — Wall-clock access
============================================

Sessions read the time through a zero-argument callable so tests can
substitute a controllable clock.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
