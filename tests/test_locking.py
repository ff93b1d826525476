"""Tests for the site lock and stop flag."""

from __future__ import annotations

import errno
import os
import signal
from pathlib import Path
from unittest.mock import patch

import pytest

from wpprov.errors import LockError, ProvisionCancelled, ResourceError
from wpprov.services.locking import StopFlag, site_lock


class TestSiteLock:
    def test_lock_file_records_owner(self, tmp_path: Path):
        lock = tmp_path / "provision" / ".wpprov.lock"
        with site_lock(lock, "my-site"):
            assert lock.read_text() == f"{os.getpid()} my-site\n"

    def test_second_holder_rejected(self, tmp_path: Path):
        lock = tmp_path / ".wpprov.lock"
        with site_lock(lock, "my-site"):
            with pytest.raises(LockError, match="already being provisioned"):
                with site_lock(lock, "my-site"):
                    pass

    def test_released_after_exit(self, tmp_path: Path):
        lock = tmp_path / ".wpprov.lock"
        with site_lock(lock, "my-site"):
            pass
        with site_lock(lock, "my-site"):
            pass

    def test_released_on_error(self, tmp_path: Path):
        lock = tmp_path / ".wpprov.lock"
        with pytest.raises(RuntimeError):
            with site_lock(lock, "my-site"):
                raise RuntimeError("boom")
        with site_lock(lock, "my-site"):
            pass

    def test_unsupported_filesystem(self, tmp_path: Path):
        lock = tmp_path / ".wpprov.lock"
        with patch("wpprov.services.locking.fcntl.flock", side_effect=OSError(errno.ENOLCK, "No locks available")):
            with pytest.raises(ResourceError, match="Cannot lock"):
                with site_lock(lock, "my-site"):
                    pass


class TestStopFlag:
    def test_checkpoint_passes_until_requested(self):
        stop = StopFlag()
        stop.checkpoint("download")
        stop.request("received SIGINT")
        assert stop.requested
        with pytest.raises(ProvisionCancelled, match="not starting 'download'") as exc_info:
            stop.checkpoint("download")
        assert exc_info.value.exit_code == 130

    def test_signal_sets_flag(self):
        previous = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
        stop = StopFlag()
        try:
            stop.install_signal_handlers()
            signal.raise_signal(signal.SIGTERM)
            assert stop.requested
            assert stop.reason == "received SIGTERM"
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
