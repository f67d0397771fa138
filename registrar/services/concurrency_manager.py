"""
Per-entity locking for mutating operations.
"""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, List, Optional

from ..core.exceptions import ConcurrencyError

logger = logging.getLogger(__name__)


def course_resource(course_code: str) -> str:
    return f"course:{course_code}"


def student_resource(student_id: str) -> str:
    return f"student:{student_id}"


class ConcurrencyManager:
    """Hands out one re-entrant lock per resource id.

    Locks for several resources are always taken in sorted order so two
    operations touching the same pair of entities cannot deadlock.
    """

    def __init__(self, default_timeout: Optional[float] = None):
        self._default_timeout = default_timeout
        self._resource_locks: Dict[str, threading.RLock] = defaultdict(threading.RLock)
        self._held: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()
        self._acquisitions = 0

    @property
    def default_timeout(self) -> Optional[float]:
        return self._default_timeout

    def _get_lock(self, resource_id: str) -> threading.RLock:
        with self._lock:
            return self._resource_locks[resource_id]

    def acquire(self, resource_id: str, timeout: Optional[float] = None) -> None:
        """Acquire the lock on a resource, raising ConcurrencyError on timeout."""
        timeout = self._default_timeout if timeout is None else timeout
        resource_lock = self._get_lock(resource_id)
        acquired = resource_lock.acquire(timeout=timeout) if timeout is not None else resource_lock.acquire()
        if not acquired:
            logger.warning("Timed out waiting for lock on %s", resource_id)
            raise ConcurrencyError(
                f"Cannot acquire lock on {resource_id}",
                details={'resource_id': resource_id, 'timeout': timeout}
            )
        with self._lock:
            self._held[resource_id] += 1
            self._acquisitions += 1

    def release(self, resource_id: str) -> None:
        """Release a lock previously acquired by the current thread."""
        self._get_lock(resource_id).release()
        with self._lock:
            self._held[resource_id] -= 1
            if self._held[resource_id] <= 0:
                del self._held[resource_id]

    @contextmanager
    def lock(self, *resource_ids: str, timeout: Optional[float] = None):
        """Context manager holding the locks of every given resource."""
        ordered = sorted(set(resource_ids))
        acquired: List[str] = []
        try:
            for resource_id in ordered:
                self.acquire(resource_id, timeout)
                acquired.append(resource_id)
            yield ordered
        finally:
            for resource_id in reversed(acquired):
                self.release(resource_id)

    def locked_resources(self) -> List[str]:
        """Resources currently held by any thread."""
        with self._lock:
            return sorted(self._held)

    def get_statistics(self) -> Dict[str, int]:
        with self._lock:
            return {
                'known_resources': len(self._resource_locks),
                'held_locks': len(self._held),
                'total_acquisitions': self._acquisitions,
            }
