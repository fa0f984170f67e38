import threading

from .prng import UINT64_MASK

# Large prime number to generate unique ids
LARGE_PRIME = 2147483647


class UniqueCounter:
    """Process-wide sequence of ids, serialized by a single lock.

    The counter starts at LARGE_PRIME and advances by LARGE_PRIME on every
    draw, wrapping at 2**64. Values repeat once the range is exhausted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = LARGE_PRIME
        self._closed = False

    def next_in_range(self, a: int, b: int) -> int:
        """Return a + (counter mod (b - a + 1)) and advance the counter."""
        with self._lock:
            if self._closed:
                raise RuntimeError("unique id counter has been shut down")
            res = self._value % (b - a + 1)
            self._value = (self._value + LARGE_PRIME) & UINT64_MASK

        return a + res

    def close(self) -> None:
        with self._lock:
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
