"""Custom exceptions for the provisioner."""

from __future__ import annotations


class ProvisionError(Exception):
    """Base exception for all provisioning operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(ProvisionError):
    """Site configuration store is unreadable or malformed."""


class CommandError(ProvisionError):
    """An external tool exited non-zero."""

    def __init__(self, message: str, *, exit_code: int = 1, argv: list[str] | None = None, stderr: str = ""):
        super().__init__(message, exit_code=exit_code)
        self.argv = argv or []
        self.stderr = stderr


class TemplateError(ProvisionError):
    """No nginx config source could be rendered."""


class ResourceError(ProvisionError):
    """A filesystem path could not be created."""


class LockError(ProvisionError):
    """Another provisioning run holds the site lock."""


class ProvisionCancelled(ProvisionError):
    """A stop was requested before the next irreversible step."""

    def __init__(self, message: str):
        super().__init__(message, exit_code=130)
