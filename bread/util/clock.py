import time


class SystemClock:
    """
    Wall-clock time in whole seconds.
    """
    def now(self) -> int:
        return int(time.time())

    def __call__(self) -> int:
        return self.now()


class ManualClock:
    """
    A clock that only moves when told to. Used to step through cooldowns and pauses.
    """
    def __init__(self, start: int = 1_700_000_000):
        self.timestamp = start

    def now(self) -> int:
        return self.timestamp

    def __call__(self) -> int:
        return self.now()

    def increase(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        self.timestamp += seconds
        return self.timestamp

    def set(self, timestamp: int) -> int:
        if timestamp < self.timestamp:
            raise ValueError("Cannot move the clock backwards")
        self.timestamp = timestamp
        return self.timestamp
