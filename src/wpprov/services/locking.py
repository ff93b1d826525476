"""Site-scoped advisory lock and cooperative stop flag."""

from __future__ import annotations

import fcntl
import os
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from wpprov.errors import LockError, ProvisionCancelled, ResourceError


@contextmanager
def site_lock(path: Path, site_id: str) -> Generator[None, None, None]:
    """Hold an exclusive non-blocking flock on ``path`` for the whole run."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(str(path), os.O_RDWR | os.O_CREAT, 0o644)
    except OSError as exc:
        raise ResourceError(f"Cannot create lock file {path}: {exc}") from exc
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as exc:
            raise LockError(f"Site '{site_id}' is already being provisioned (lock held on {path})") from exc
        except OSError as exc:
            raise ResourceError(f"Cannot lock {path}: {exc}") from exc
        os.ftruncate(fd, 0)
        os.write(fd, f"{os.getpid()} {site_id}\n".encode())
        try:
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


class StopFlag:
    """Set by a signal; checked before each irreversible step."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason = ""

    def request(self, reason: str = "stop requested") -> None:
        self.reason = reason
        self._event.set()

    @property
    def requested(self) -> bool:
        return self._event.is_set()

    def checkpoint(self, step: str) -> None:
        if self.requested:
            raise ProvisionCancelled(f"{self.reason}; not starting '{step}'")

    def install_signal_handlers(self) -> None:
        def _handler(signum: int, _frame: object) -> None:
            self.request(f"received {signal.Signals(signum).name}")

        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, _handler)
