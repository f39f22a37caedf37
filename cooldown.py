import time
from typing import Callable, Dict, Optional

COOLDOWN_MS = 3500


def now_ms() -> int:
    return int(time.time() * 1000)


class CooldownTracker:
    """Per-user debounce between command invocations.

    Only the gap since the user's last accepted command is checked; a rejected
    call does not move the window. Entries live as long as the tracker does.
    Check-then-set runs without an await in between, so tasks sharing the
    tracker on one event loop need no lock.
    """

    def __init__(self, window_ms: int = COOLDOWN_MS, clock: Callable[[], int] = now_ms):
        self.window_ms = window_ms
        self.clock = clock
        self.last_used: Dict[str, int] = {}

    def check_and_record(self, user_id, now: Optional[int] = None) -> bool:
        """Return True and record `now` if the user may run a command"""
        if now is None:
            now = self.clock()
        key = str(user_id)

        last = self.last_used.get(key)
        if last is not None and now - last < self.window_ms:
            return False

        self.last_used[key] = now
        return True

    def __len__(self):
        return len(self.last_used)
