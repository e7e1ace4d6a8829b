'''
Advisory inter-process lock.

Several programs may manage ipset on the same host; they can
serialize their calls with a shared `flock()` on a lock file:

.. code-block:: python

    from pyipset import IPSet, IPSetLock

    ipset = IPSet(lock=IPSetLock('/run/ipset.lock'))

The runner does not lock anything unless a lock is provided.
'''

import fcntl
import logging
import os
import threading
import time
from typing import Optional

from pyipset import config
from pyipset.exceptions import IPSetLockError

log = logging.getLogger(__name__)


class IPSetLock:
    '''Exclusive `flock()` on a lock file.

    `acquire()` waits up to `config.lock_timeout` seconds in total,
    both for other threads sharing the object and for the file lock.
    `release()` may be called any time, also if the lock was
    never acquired.
    '''

    def __init__(self, path: Optional[str] = None):
        self.path = path or config.lock_path
        self._fd: Optional[int] = None
        # flock() is per open file description, so threads
        # of one process have to be serialized separately
        self._mutex = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._fd is not None

    def _try_lock(self, fd: int) -> bool:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            return False
        return True

    def _timeout(self) -> IPSetLockError:
        return IPSetLockError(
            f'failed to acquire ipset lock {self.path}: timeout'
        )

    def acquire(self) -> None:
        deadline = time.monotonic() + config.lock_timeout
        if not self._mutex.acquire(timeout=config.lock_timeout):
            raise self._timeout()
        try:
            self._acquire(deadline)
        except BaseException:
            self._mutex.release()
            raise

    def _acquire(self, deadline: float) -> None:
        try:
            fd = os.open(self.path, os.O_RDONLY | os.O_CREAT, 0o600)
        except OSError as e:
            raise IPSetLockError(
                f'failed to open ipset lock {self.path}: {e}'
            ) from e
        try:
            while not self._try_lock(fd):
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise self._timeout()
                time.sleep(min(config.lock_poll_interval, remaining))
        except BaseException:
            os.close(fd)
            raise
        self._fd = fd
        log.debug('acquired ipset lock %s', self.path)

    def release(self) -> None:
        if self._fd is None:
            return
        # closing the file drops the lock
        fd, self._fd = self._fd, None
        os.close(fd)
        log.debug('released ipset lock %s', self.path)
        self._mutex.release()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, *_):
        self.release()
