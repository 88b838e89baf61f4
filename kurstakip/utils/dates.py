from datetime import datetime
from typing import Optional


def local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Aware datetimes ("...Z" from browsers) become naive local time.
    Stored dates are naive, so every comparison has to happen on naive values.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
