from __future__ import annotations

import threading


class ConversionCounter:
    """Process-wide count of requests that reached the conversion step."""

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


__all__ = ["ConversionCounter"]
