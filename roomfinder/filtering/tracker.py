from __future__ import annotations

import itertools
import threading
from collections import OrderedDict

# Sessions beyond this are evicted least recently used first
MAX_TRACKED_SESSIONS = 10_000


class RequestSequence:
    """
    Monotonic tokens for filter requests.

    Each new filter action takes a token; when its result arrives it is only
    shown if no newer token has been issued in the meantime.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_latest(self, token: int) -> bool:
        with self._lock:
            return token == self._latest


_sequences: OrderedDict[str, RequestSequence] = OrderedDict()
_sequences_lock = threading.Lock()


def get_sequence(session_id: str) -> RequestSequence:
    """
    Return the request sequence for a client session, creating it on first use.

    At most ``MAX_TRACKED_SESSIONS`` sequences are kept; a session evicted
    here starts over from token 1 when it comes back.
    """
    with _sequences_lock:
        seq = _sequences.get(session_id)
        if seq is None:
            seq = _sequences[session_id] = RequestSequence()
        _sequences.move_to_end(session_id)
        while len(_sequences) > MAX_TRACKED_SESSIONS:
            _sequences.popitem(last=False)
        return seq


def tracked_sessions() -> int:
    with _sequences_lock:
        return len(_sequences)


def clear_sequences() -> None:
    with _sequences_lock:
        _sequences.clear()
