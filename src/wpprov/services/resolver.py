"""Resolve a SiteConfig from the YAML store and the runtime settings."""

from __future__ import annotations

from pydantic import ValidationError

from wpprov_common import InstallMode, ProvisionerSettings, SiteConfig
from wpprov_common.constants import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USER,
    DEFAULT_DB_PREFIX,
    DEFAULT_INSTALL_MODE,
    DEFAULT_LOCALE,
    DEFAULT_WP_VERSION,
    SECRET_OPTION_KEYS,
)

from wpprov.errors import ConfigError
from wpprov.services.config_store import YamlConfigStore


def primary_domain(site_id: str, store: YamlConfigStore) -> str:
    """First configured host alias, or ``<site_id>.test``."""
    hosts = store.hosts()
    return hosts[0] if hosts else f"{site_id}.test"


def _flag(store: YamlConfigStore, key: str) -> bool:
    # any non-empty value switches an optional step on, except an explicit false
    value = store.get_value(f"custom.{key}")
    return value != "" and value.lower() != "false"


def resolve(site_id: str, store: YamlConfigStore) -> SiteConfig:
    """Build the immutable SiteConfig for ``site_id`` from an already loaded store."""
    if not site_id:
        raise ConfigError("No site identifier given (set VVV_SITE_NAME)")

    def custom(key: str, default: str = "") -> str:
        return store.get_value(f"custom.{key}", default)

    domain = primary_domain(site_id, store)
    mode = custom("wp_type", DEFAULT_INSTALL_MODE)
    try:
        install_mode = InstallMode(mode)
    except ValueError as exc:
        choices = ", ".join(m.value for m in InstallMode)
        raise ConfigError(f"Unknown wp_type '{mode}' for site '{site_id}' (expected one of: {choices})") from exc

    options = {}
    for key, option in SECRET_OPTION_KEYS.items():
        secret = custom(key)
        if secret:
            options[option] = secret

    try:
        return SiteConfig(
            site_id=site_id,
            domain=domain,
            title=custom("site_title", domain),
            wp_version=custom("wp_version", DEFAULT_WP_VERSION),
            locale=custom("locale", DEFAULT_LOCALE),
            install_mode=install_mode,
            db_name=custom("db_name", site_id),
            db_prefix=custom("db_prefix", DEFAULT_DB_PREFIX),
            admin_user=custom("admin_user", DEFAULT_ADMIN_USER),
            admin_password=custom("admin_password", DEFAULT_ADMIN_PASSWORD),
            admin_email=custom("admin_email", DEFAULT_ADMIN_EMAIL),
            plugins=tuple(store.get_list("custom.install_plugins")),
            themes=tuple(store.get_list("custom.install_themes")),
            live_url=custom("live_url") or None,
            constants=tuple(store.get_values("custom.wpconfig_constants")),
            options=options,
            delete_default_plugins=_flag(store, "delete_default_plugins"),
            delete_default_themes=_flag(store, "delete_default_themes"),
            install_test_content=_flag(store, "install_test_content"),
            initial_base_setup=_flag(store, "initial_base_setup"),
            base_setup_theme=custom("base_setup_theme") or None,
            base_setup_plugins=tuple(store.get_list("custom.base_setup_plugins")),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration for site '{site_id}': {exc}") from exc


def load_site(settings: ProvisionerSettings) -> SiteConfig:
    """Read the store named by ``settings`` and resolve the current site."""
    store = YamlConfigStore.load(settings.config_path, settings.site_name)
    return resolve(settings.site_name, store)
