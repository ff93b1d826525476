"""Read-only access to the VVV YAML site configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from wpprov.errors import ConfigError


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class YamlConfigStore:
    """Nested key/value view of ``sites.<site_id>`` in a VVV config file.

    Paths are dot-separated and relative to the site section, so
    ``get_value("custom.locale")`` reads ``sites.<site_id>.custom.locale``.
    All scalar values come back as strings.
    """

    def __init__(self, data: dict[str, Any], site_id: str):
        self.site_id = site_id
        sites = data.get("sites") or {}
        if not isinstance(sites, dict):
            raise ConfigError("'sites' must be a mapping")
        section = sites.get(site_id) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"site '{site_id}' must be a mapping")
        self._site = section

    @classmethod
    def load(cls, path: Path, site_id: str) -> YamlConfigStore:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ConfigError(f"Cannot read config store {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed config store {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config store {path} must contain a mapping")
        return cls(data, site_id)

    def _lookup(self, path: str) -> Any:
        node: Any = self._site
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get_value(self, path: str, default: str = "") -> str:
        value = self._lookup(path)
        if value is None or isinstance(value, (dict, list)):
            return default
        text = _stringify(value)
        return text if text != "" else default

    def get_values(self, path: str) -> list[tuple[str, str]]:
        """Return the ordered key/value pairs of a mapping (empty if absent)."""
        value = self._lookup(path)
        if value is None:
            return []
        if not isinstance(value, dict):
            raise ConfigError(f"'{path}' for site '{self.site_id}' must be a mapping")
        return [(str(k), "" if v is None else _stringify(v)) for k, v in value.items()]

    def get_list(self, path: str) -> list[str]:
        """Return a list value; a bare scalar is split on whitespace."""
        value = self._lookup(path)
        if value is None:
            return []
        if isinstance(value, list):
            return [_stringify(item) for item in value if item is not None and _stringify(item)]
        if isinstance(value, dict):
            raise ConfigError(f"'{path}' for site '{self.site_id}' must be a list")
        return _stringify(value).split()

    def hosts(self) -> list[str]:
        return self.get_list("hosts")
