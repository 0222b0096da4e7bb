"""Lock strategies injected into the sink.

``threading.Lock`` serializes writers from several threads. ``NullLock``
has the same context-manager interface and does nothing; use it only when
one thread owns the sink (or an outer lock already serializes callers).
"""

import threading


class NullLock:
    def acquire(self, blocking: bool = True, timeout: float = -1) -> bool:
        return True

    def release(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def make_lock(thread_safe: bool = True):
    return threading.Lock() if thread_safe else NullLock()
