"""
Chronologically ordered keys in the Realtime Database push-id format.

A push id is 20 characters: 8 characters encoding the creation time in
milliseconds followed by 12 random characters. Keys sort lexicographically in
creation order, which is what the hosted backend assigns on POST.
"""
import secrets
import threading
import time

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

_lock = threading.Lock()
_last_push_time = 0
_last_rand_chars = [0] * 12


def generate_push_id(now_ms: int | None = None) -> str:
    """Generate a new push id. Ids generated in the same millisecond stay ordered."""
    global _last_push_time, _last_rand_chars

    if now_ms is None:
        now_ms = int(time.time() * 1000)

    with _lock:
        duplicate_time = now_ms == _last_push_time
        _last_push_time = now_ms

        time_chars = []
        remaining = now_ms
        for _ in range(8):
            time_chars.append(PUSH_CHARS[remaining % 64])
            remaining //= 64
        time_chars.reverse()

        if not duplicate_time:
            _last_rand_chars = [secrets.randbelow(64) for _ in range(12)]
        else:
            # Same millisecond: increment the random part by one
            i = 11
            while i >= 0 and _last_rand_chars[i] == 63:
                _last_rand_chars[i] = 0
                i -= 1
            if i >= 0:
                _last_rand_chars[i] += 1

        rand_chars = [PUSH_CHARS[n] for n in _last_rand_chars]

    return "".join(time_chars) + "".join(rand_chars)
