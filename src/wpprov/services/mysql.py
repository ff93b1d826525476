"""MySQL client wrappers for database setup."""

from __future__ import annotations

from wpprov_common import ProvisionerSettings
from wpprov_common.constants import DB_HOST, DB_PASSWORD, DB_USER

from wpprov.services.executor import CommandExecutor


def _mysql(executor: CommandExecutor, settings: ProvisionerSettings, sql: str) -> None:
    executor.check(
        [
            "mysql",
            "-u", settings.db_root_user,
            f"--password={settings.db_root_password}",
            "-e", sql,
        ],
        sandboxed=False,
    )


def ensure_database(executor: CommandExecutor, settings: ProvisionerSettings, db_name: str) -> None:
    """Create the site database if absent and grant the wp user access to it."""
    _mysql(executor, settings, f"CREATE DATABASE IF NOT EXISTS `{db_name}`")
    _mysql(executor, settings, f"CREATE USER IF NOT EXISTS '{DB_USER}'@'{DB_HOST}' IDENTIFIED BY '{DB_PASSWORD}'")
    _mysql(executor, settings, f"GRANT ALL PRIVILEGES ON `{db_name}`.* TO '{DB_USER}'@'{DB_HOST}'")
