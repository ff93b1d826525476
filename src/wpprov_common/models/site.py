"""Site configuration model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wpprov_common.constants import (
    DB_NAME_FORBIDDEN,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USER,
    DEFAULT_DB_PREFIX,
    DEFAULT_LOCALE,
    DEFAULT_WP_VERSION,
)


class InstallMode(str, Enum):
    SINGLE = "single"
    SUBDOMAIN = "subdomain"
    SUBDIRECTORY = "subdirectory"
    NONE = "none"

    @property
    def is_multisite(self) -> bool:
        return self in (InstallMode.SUBDOMAIN, InstallMode.SUBDIRECTORY)


def sanitize_db_name(name: str) -> str:
    """Strip the characters MySQL identifiers built from site names must not carry."""
    return "".join(ch for ch in name if ch not in DB_NAME_FORBIDDEN)


class SiteConfig(BaseModel):
    """One WordPress site, resolved once per provisioning run."""

    model_config = ConfigDict(frozen=True)

    site_id: str
    domain: str
    title: str
    wp_version: str = DEFAULT_WP_VERSION
    locale: str = DEFAULT_LOCALE
    install_mode: InstallMode = InstallMode.SINGLE
    db_name: str
    db_prefix: str = DEFAULT_DB_PREFIX
    admin_user: str = DEFAULT_ADMIN_USER
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    admin_email: str = DEFAULT_ADMIN_EMAIL
    plugins: tuple[str, ...] = ()
    themes: tuple[str, ...] = ()
    live_url: str | None = None
    constants: tuple[tuple[str, str], ...] = ()
    options: dict[str, str] = Field(default_factory=dict)
    delete_default_plugins: bool = False
    delete_default_themes: bool = False
    install_test_content: bool = False
    initial_base_setup: bool = False
    base_setup_theme: str | None = None
    base_setup_plugins: tuple[str, ...] = ()

    @field_validator("db_name")
    @classmethod
    def _clean_db_name(cls, value: str) -> str:
        cleaned = sanitize_db_name(value)
        if not cleaned:
            raise ValueError(f"database name {value!r} is empty after sanitization")
        return cleaned
