"""
Note Identifier Generation.

Identifiers are random UUID4 strings. When the operating system cannot
supply entropy, ids fall back to ``note_<ms>_<hex>``: a non-decreasing
millisecond timestamp plus a 64-bit pseudo-random suffix.
"""

import random
import threading
import uuid

from notekeeper.core.utils import now_ms

_lock = threading.Lock()
_last_ms = 0


def _fallback_id() -> str:
    global _last_ms
    with _lock:
        _last_ms = max(_last_ms, now_ms())
        stamp = _last_ms
    return f"note_{stamp}_{random.getrandbits(64):016x}"


def new_id() -> str:
    """Return a new note identifier, unique for the life of the process."""
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        # os.urandom has no entropy source on this platform
        return _fallback_id()
