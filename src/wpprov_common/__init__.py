"""Shared models, settings and constants for the wpprov provisioner."""

from wpprov_common.config import ProvisionerSettings
from wpprov_common.constants import (
    DB_NAME_FORBIDDEN,
    DEFAULT_INSTALL_MODE,
    LIVE_URL_PLACEHOLDER,
)
from wpprov_common.models import (
    ActionKind,
    AuditEvent,
    InstallMode,
    ProvisionAction,
    ProvisionReport,
    SiteConfig,
    SiteProbe,
    sanitize_db_name,
)

__all__ = [
    "ActionKind",
    "AuditEvent",
    "DB_NAME_FORBIDDEN",
    "DEFAULT_INSTALL_MODE",
    "InstallMode",
    "LIVE_URL_PLACEHOLDER",
    "ProvisionAction",
    "ProvisionReport",
    "ProvisionerSettings",
    "SiteConfig",
    "SiteProbe",
    "sanitize_db_name",
]
