"""Provisioning probe, action and report models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SiteProbe(BaseModel):
    """Observed state of the site at the start of a run."""

    model_config = ConfigDict(frozen=True)

    loader_present: bool = False
    config_present: bool = False
    installed: bool = False


class ActionKind(str, Enum):
    SKIP = "skip"
    DOWNLOAD = "download"
    WRITE_CONFIG = "write_config"
    RESTORE_BACKUP = "restore_backup"
    FRESH_INSTALL = "fresh_install"
    UPDATE_VERSION = "update_version"


TERMINAL_KINDS = frozenset(
    {
        ActionKind.SKIP,
        ActionKind.RESTORE_BACKUP,
        ActionKind.FRESH_INSTALL,
        ActionKind.UPDATE_VERSION,
    }
)


class ProvisionAction(BaseModel):
    """A single remediation step chosen by the planner."""

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    backup_path: Path | None = None
    target_version: str | None = None
    force: bool = False

    @property
    def terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    @classmethod
    def skip(cls) -> ProvisionAction:
        return cls(kind=ActionKind.SKIP)

    @classmethod
    def download(cls) -> ProvisionAction:
        return cls(kind=ActionKind.DOWNLOAD)

    @classmethod
    def write_config(cls) -> ProvisionAction:
        return cls(kind=ActionKind.WRITE_CONFIG)

    @classmethod
    def restore_backup(cls, path: Path) -> ProvisionAction:
        return cls(kind=ActionKind.RESTORE_BACKUP, backup_path=path)

    @classmethod
    def fresh_install(cls) -> ProvisionAction:
        return cls(kind=ActionKind.FRESH_INSTALL)

    @classmethod
    def update_version(cls, target: str, *, force: bool = False) -> ProvisionAction:
        return cls(kind=ActionKind.UPDATE_VERSION, target_version=target, force=force)

    def describe(self) -> str:
        if self.kind is ActionKind.RESTORE_BACKUP:
            return f"restore_backup({self.backup_path})"
        if self.kind is ActionKind.UPDATE_VERSION:
            mode = "downgrade" if self.force else "update"
            return f"update_version({mode} to {self.target_version})"
        return self.kind.value


class ProvisionReport(BaseModel):
    """What a run did, including tolerated failures of optional steps."""

    site_id: str
    actions: list[ProvisionAction] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def terminal_action(self) -> ProvisionAction | None:
        for action in self.actions:
            if action.terminal:
                return action
        return None

    def warn(self, message: str) -> None:
        self.warnings.append(message)
