"""
Current time in the storage convention: naive UTC.

Timestamp columns are declared as plain ``DateTime`` (no timezone), so every
value written to them comes from here.
"""

import datetime


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
