"""
Injectable clock.

Routes take `now` through the get_clock dependency so tests can pin the
current instant with app.dependency_overrides.
"""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.utcnow()


def get_clock() -> Clock:
    """FastAPI dependency returning the clock used for scheduling."""
    return system_clock
