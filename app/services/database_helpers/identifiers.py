# /app/services/database_helpers/identifiers.py

"""
Identity and timestamp helpers for the local record store.

Ids are derived from the current time in milliseconds plus a process-wide
sequence number, so two ids issued in the same millisecond (or by two
service instances serving different requests) never collide. Batch ids
share one stamp and are qualified by their index in the batch.
"""

import itertools
from datetime import datetime, timezone
from typing import Callable, Container, List

Clock = Callable[[], datetime]

# Shared by every IdFactory in the process.
_sequence = itertools.count()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Formats a timestamp as ISO-8601 UTC with millisecond precision, e.g. '2025-03-01T09:30:00.000Z'."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class IdFactory:
    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def _stamp(self) -> str:
        millis = int(self.clock().timestamp() * 1000)
        return f"{millis}_{next(_sequence)}"

    def new_id(self, prefix: str, taken: Container[str] = ()) -> str:
        candidate = f"{prefix}_{self._stamp()}"
        while candidate in taken:
            candidate = f"{prefix}_{self._stamp()}"
        return candidate

    def new_batch_ids(self, prefix: str, size: int, taken: Container[str] = ()) -> List[str]:
        while True:
            batch = f"{prefix}_{self._stamp()}"
            ids = [f"{batch}-{index}" for index in range(size)]
            if not any(candidate in taken for candidate in ids):
                return ids

    def now_iso(self) -> str:
        return to_iso(self.clock())
