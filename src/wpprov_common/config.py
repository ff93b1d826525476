"""Runtime settings for the provisioner, sourced from the VVV environment."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from wpprov_common.constants import (
    DB_ROOT_PASSWORD,
    DB_ROOT_USER,
    GLOBAL_BACKUP_DIR,
    LOCAL_DUMP_PATH,
    LOG_DIR,
    NGINX_CUSTOM_TEMPLATE,
    NGINX_DEFAULT_TEMPLATE,
    NGINX_OUTPUT,
    PROVISION_DIR,
    PUBLIC_HTML_DIR,
    SANDBOX_USER,
    VVV_CONFIG_PATH,
)


def _default_site_path() -> Path:
    env = os.environ.get("VVV_PATH_TO_SITE")
    if env:
        return Path(env)
    return Path.cwd()


def _default_sandbox() -> list[str]:
    user = os.environ.get("WPPROV_SANDBOX_USER", SANDBOX_USER)
    if not user:
        return []
    return ["sudo", "-EH", "-u", user]


class ProvisionerSettings(BaseModel):
    """Runtime configuration resolved once at startup."""

    site_name: str = Field(default_factory=lambda: os.environ.get("VVV_SITE_NAME", ""))
    site_path: Path = Field(default_factory=_default_site_path)
    config_path: Path = Field(
        default_factory=lambda: Path(os.environ.get("VVV_CONFIG", str(VVV_CONFIG_PATH)))
    )
    backup_dir: Path = Field(
        default_factory=lambda: Path(os.environ.get("WPPROV_BACKUP_DIR", str(GLOBAL_BACKUP_DIR)))
    )
    db_root_user: str = Field(default_factory=lambda: os.environ.get("WPPROV_DB_ROOT_USER", DB_ROOT_USER))
    db_root_password: str = Field(
        default_factory=lambda: os.environ.get("WPPROV_DB_ROOT_PASSWORD", DB_ROOT_PASSWORD)
    )
    sandbox: list[str] = Field(default_factory=_default_sandbox)
    wp_cli: str = Field(default_factory=lambda: os.environ.get("WPPROV_WP_CLI", "wp"))

    @property
    def public_html(self) -> Path:
        return self.site_path / PUBLIC_HTML_DIR

    @property
    def log_dir(self) -> Path:
        return self.site_path / LOG_DIR

    @property
    def provision_dir(self) -> Path:
        return self.site_path / PROVISION_DIR

    @property
    def loader_file(self) -> Path:
        return self.public_html / "wp-load.php"

    @property
    def wp_config_file(self) -> Path:
        return self.public_html / "wp-config.php"

    @property
    def local_dump(self) -> Path:
        return self.site_path / LOCAL_DUMP_PATH

    @property
    def global_dump(self) -> Path:
        return self.backup_dir / f"{self.site_name}.sql"

    @property
    def nginx_custom_template(self) -> Path:
        return self.provision_dir / NGINX_CUSTOM_TEMPLATE

    @property
    def nginx_default_template(self) -> Path:
        return self.provision_dir / NGINX_DEFAULT_TEMPLATE

    @property
    def nginx_output(self) -> Path:
        return self.provision_dir / NGINX_OUTPUT

    @property
    def lock_file(self) -> Path:
        return self.provision_dir / ".wpprov.lock"

    @property
    def audit_jsonl_path(self) -> Path:
        return self.log_dir / "provision-audit.jsonl"

    @property
    def audit_db_path(self) -> Path:
        return self.log_dir / "provision-audit.db"
