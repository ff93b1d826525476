"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from wpprov_common import ProvisionerSettings

DEFAULT_TEMPLATE = """server {
  server_name {vvv_hosts};
  location ~ ^/wp-content/uploads/ {
    {{LIVE_URL}}
    try_files $uri =404;
  }
}
"""


@pytest.fixture
def tmp_settings(tmp_path: Path) -> ProvisionerSettings:
    """Return ProvisionerSettings pointing at a temp site tree with the default nginx template."""
    site_path = tmp_path / "www" / "my-site"
    (site_path / "provision").mkdir(parents=True)
    (site_path / "provision" / "vvv-nginx-default.conf").write_text(DEFAULT_TEMPLATE)
    return ProvisionerSettings(
        site_name="my-site",
        site_path=site_path,
        config_path=tmp_path / "config.yml",
        backup_dir=tmp_path / "backups",
        sandbox=[],
    )


@pytest.fixture
def write_store(tmp_settings: ProvisionerSettings):
    """Write a VVV config.yml containing the given site section."""

    def _write(site: dict[str, Any] | None = None) -> Path:
        data = {"sites": {tmp_settings.site_name: site or {}}}
        tmp_settings.config_path.write_text(yaml.safe_dump(data, sort_keys=False))
        return tmp_settings.config_path

    return _write
