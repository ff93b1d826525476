"""Process-wide ProvisionerSettings, built once from the environment."""

from __future__ import annotations

from functools import lru_cache

from wpprov_common import ProvisionerSettings


@lru_cache(maxsize=1)
def get_settings() -> ProvisionerSettings:
    """Return the global ProvisionerSettings (resolved once, cached)."""
    return ProvisionerSettings()
