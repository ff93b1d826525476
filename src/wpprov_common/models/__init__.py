"""Shared Pydantic models."""

from wpprov_common.models.audit_event import AuditEvent
from wpprov_common.models.provision import (
    ActionKind,
    ProvisionAction,
    ProvisionReport,
    SiteProbe,
)
from wpprov_common.models.site import InstallMode, SiteConfig, sanitize_db_name

__all__ = [
    "ActionKind",
    "AuditEvent",
    "InstallMode",
    "ProvisionAction",
    "ProvisionReport",
    "SiteConfig",
    "SiteProbe",
    "sanitize_db_name",
]
