"""Transcript message identifiers.

One generator is shared by every controller in the process. It starts at
zero (the first id handed out is ``msg-1``) and is never reset, so an id is
never reused even after a call is reset or restarted. Tests inject their own
generator to get deterministic ids.
"""

import threading
from dataclasses import dataclass, field


@dataclass
class MessageIdGenerator:
    prefix: str = "msg"
    start: int = 0

    _counter: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self):
        self._counter = self.start

    def __call__(self) -> str:
        return self.next_id()

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"{self.prefix}-{self._counter}"


_process_ids = MessageIdGenerator()


def process_id_generator() -> MessageIdGenerator:
    """Return the process-wide generator used when none is injected."""
    return _process_ids
