"""Provisioning state machine: probe the site and bring it to the desired state.

One run walks ``Start -> EnsureDatabase -> EnsureLogDirs -> CheckLoader ->
CheckConfigFile -> CheckInstalled`` and then fires exactly one terminal action
(restore, fresh install, version update, or skip when ``wp_type`` is
``none``). The nginx config, wp-config constants, plugins and themes are
applied after every terminal action.

Required steps raise on the first failing command. Every required step either
probes before acting or is idempotent, so a re-run resumes a broken run.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console

from wpprov_common import (
    ActionKind,
    InstallMode,
    ProvisionAction,
    ProvisionerSettings,
    ProvisionReport,
    SiteConfig,
    SiteProbe,
)
from wpprov_common.constants import DB_HOST, DB_PASSWORD, DB_USER, NGINX_LOG_FILES

from wpprov.errors import CommandError, ResourceError
from wpprov.services import coercion, customize, mysql, nginx_renderer
from wpprov.services.executor import CommandExecutor
from wpprov.services.locking import StopFlag
from wpprov.services.templating import render_template
from wpprov.services.wp import WpCli

console = Console()

# ---------------------------------------------------------------------------
# Planning (pure)
# ---------------------------------------------------------------------------

_VERSION_PART_RE = re.compile(r"\d+|[A-Za-z]+")


def _version_key(version: str) -> tuple[tuple[int, int | str], ...]:
    # digit runs compare numerically so 6.10 sorts after 6.9
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part)
        for part in _VERSION_PART_RE.findall(version)
    )


def compare_versions(running: str, target: str) -> int:
    """-1, 0 or 1 as ``running`` is older than, equal to or newer than ``target``."""
    if running == target:
        return 0
    if not (running[:1].isdigit() and target[:1].isdigit()):
        return (running > target) - (running < target)
    left, right = _version_key(running), _version_key(target)
    return (left > right) - (left < right)


def choose_update(running: str, target: str) -> ProvisionAction:
    """Forward update, or a forced downgrade when the site runs a newer version."""
    return ProvisionAction.update_version(target, force=compare_versions(running, target) > 0)


def prerequisite_actions(probe: SiteProbe) -> list[ProvisionAction]:
    actions = []
    if not probe.loader_present:
        actions.append(ProvisionAction.download())
    if not probe.config_present:
        actions.append(ProvisionAction.write_config())
    return actions


def terminal_action(
    site: SiteConfig,
    probe: SiteProbe,
    local_dump: Path | None,
    global_dump: Path | None,
) -> ProvisionAction:
    """Pick the single terminal action; dumps are passed only when they exist."""
    if site.install_mode is InstallMode.NONE:
        return ProvisionAction.skip()
    if probe.installed:
        return ProvisionAction.update_version(site.wp_version)
    if local_dump is not None:
        return ProvisionAction.restore_backup(local_dump)
    if global_dump is not None:
        return ProvisionAction.restore_backup(global_dump)
    return ProvisionAction.fresh_install()


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


def render_extra_php() -> str:
    return render_template(
        "wp_config_extra.php.j2",
        constants=[("WP_DEBUG", "true"), ("SCRIPT_DEBUG", "true"), ("WP_CACHE", "false")],
    )


class Provisioner:
    """Drives one site through a single provisioning pass."""

    def __init__(
        self,
        site: SiteConfig,
        settings: ProvisionerSettings,
        executor: CommandExecutor,
        *,
        stop: StopFlag | None = None,
    ):
        self.site = site
        self.settings = settings
        self.executor = executor
        self.stop = stop or StopFlag()
        self.wp = WpCli(executor, settings.public_html, settings.wp_cli)

    # -- probes ------------------------------------------------------------

    def probe_files(self) -> SiteProbe:
        return SiteProbe(
            loader_present=self.settings.loader_file.is_file(),
            config_present=self.settings.wp_config_file.is_file(),
        )

    def probe_installed(self, probe: SiteProbe) -> SiteProbe:
        return probe.model_copy(update={"installed": self.wp.is_installed()})

    def existing_dumps(self) -> tuple[Path | None, Path | None]:
        local, global_ = self.settings.local_dump, self.settings.global_dump
        return (local if local.is_file() else None, global_ if global_.is_file() else None)

    # -- driver ------------------------------------------------------------

    def run(self) -> ProvisionReport:
        report = ProvisionReport(site_id=self.site.site_id)

        if self.site.install_mode is InstallMode.NONE:
            console.print(" * wp_type was set to none, provisioning WP was skipped, moving to Nginx configs")
            report.actions.append(ProvisionAction.skip())
        else:
            console.print(f" * Install type is '{self.site.install_mode.value}'")
            self.stop.checkpoint("ensure database")
            self.ensure_database()
            self.ensure_log_dirs()

            probe = self.probe_files()
            for action in prerequisite_actions(probe):
                self.execute(action, report)
                report.actions.append(action)

            probe = self.probe_installed(probe)
            if not probe.installed:
                console.print(" * WordPress is present but isn't installed to the database, checking for SQL dumps")
            action = terminal_action(self.site, probe, *self.existing_dumps())
            report.actions.append(self.execute(action, report))

        self.finish(report)
        return report

    def execute(self, action: ProvisionAction, report: ProvisionReport) -> ProvisionAction:
        """Perform ``action``; returns it, refined with the update direction if any."""
        self.stop.checkpoint(action.kind.value)
        if action.kind is ActionKind.DOWNLOAD:
            self.download()
        elif action.kind is ActionKind.WRITE_CONFIG:
            self.write_wp_config()
        elif action.kind is ActionKind.RESTORE_BACKUP:
            self.restore_backup(action.backup_path)
        elif action.kind is ActionKind.FRESH_INSTALL:
            self.fresh_install(report)
        elif action.kind is ActionKind.UPDATE_VERSION:
            return self.update_version()
        return action

    # -- required steps ----------------------------------------------------

    def ensure_database(self) -> None:
        console.print(f" * Creating database '{self.site.db_name}' (if it's not already there)")
        mysql.ensure_database(self.executor, self.settings, self.site.db_name)
        console.print(" * DB operations done.")

    def ensure_log_dirs(self) -> None:
        console.print(" * Setting up the log subfolder for Nginx logs")
        log_dir = self.settings.log_dir
        steps = [
            ["mkdir", "-p", str(log_dir)],
            ["touch", *(str(log_dir / name) for name in NGINX_LOG_FILES)],
            ["mkdir", "-p", str(self.settings.public_html)],
        ]
        for argv in steps:
            try:
                self.executor.check(argv)
            except CommandError as exc:
                raise ResourceError(str(exc), exit_code=exc.exit_code) from exc

    def download(self) -> None:
        console.print(f" * Downloading WordPress version '{self.site.wp_version}' locale: '{self.site.locale}'")
        self.wp.core_download(self.site.wp_version, self.site.locale)

    def write_wp_config(self) -> None:
        console.print(" * Setting up wp-config.php")
        self.wp.core_config(self.site.db_name, self.site.db_prefix, DB_USER, DB_PASSWORD, render_extra_php())

    def restore_backup(self, dump: Path | None) -> None:
        console.print(f" * Found a database backup at {dump}. Restoring the site")
        for name, value in (
            ("DB_USER", DB_USER),
            ("DB_PASSWORD", DB_PASSWORD),
            ("DB_HOST", DB_HOST),
            ("DB_NAME", self.site.db_name),
            ("table_prefix", self.site.db_prefix),
        ):
            self.wp.config_set(name, value)
        self.wp.db_import(dump)
        console.print(" * Installed database backup")

    def fresh_install(self, report: ProvisionReport) -> None:
        site = self.site
        console.print(" * Installing WordPress")
        self.wp.core_install(site.domain, site.title, site.admin_user, site.admin_email, site.admin_password)
        console.print(
            f" * WordPress was installed, with the username '{site.admin_user}' at '{site.admin_email}'"
        )
        if site.install_mode.is_multisite:
            console.print(f" * Running {site.install_mode.value} multisite install")
            self.wp.multisite_install(
                site.domain,
                site.title,
                site.admin_user,
                site.admin_email,
                site.admin_password,
                subdomains=site.install_mode is InstallMode.SUBDOMAIN,
            )
            console.print(" * Multisite install complete")

        if site.delete_default_plugins:
            customize.delete_default_plugins(self.wp, report)
        if site.delete_default_themes:
            customize.delete_default_themes(self.wp, report)
        if site.install_test_content:
            self.stop.checkpoint("test content import")
            customize.import_test_content(self.wp, report)
        if site.initial_base_setup:
            self.stop.checkpoint("initial base setup")
            customize.base_setup(self.wp, site, report)

    def update_version(self) -> ProvisionAction:
        action = choose_update(self.wp.core_version(), self.site.wp_version)
        if action.force:
            console.print(f" * Installing an older version '{action.target_version}' of WordPress")
        else:
            console.print(f" * Updating WordPress '{action.target_version}'")
        self.wp.core_update(action.target_version, force=action.force)
        return action

    # -- always-run tail ---------------------------------------------------

    def finish(self, report: ProvisionReport) -> None:
        self.render_nginx()
        self.inject_constants(report)
        self.install_plugins(report)
        self.install_themes(report)

    def render_nginx(self) -> None:
        console.print(" * Copying the sites Nginx config template")
        if self.site.live_url:
            console.print(" * Adding support for Live URL redirects to NGINX of the website's media")
        text = nginx_renderer.render(self.settings, self.site.live_url)
        nginx_renderer.write_config(self.settings.nginx_output, text)

    def inject_constants(self, report: ProvisionReport) -> None:
        for key, value in self.site.constants:
            self.stop.checkpoint(f"constant {key}")
            typed = coercion.coerce(value)
            console.print(f" * Adding constant '{key}' with value '{value}' to wp-config.php")
            customize.attempt(
                report,
                f"set constant {key}",
                lambda k=key, t=typed: self.wp.config_set(k, coercion.php_literal(t), raw=coercion.is_raw(t)),
            )

    def install_plugins(self, report: ProvisionReport) -> None:
        for plugin in self.site.plugins:
            self.stop.checkpoint(f"plugin {plugin}")
            console.print(f" * Installing/activating plugin: '{plugin}'")
            customize.attempt(report, f"install plugin {plugin}", lambda p=plugin: self.wp.plugin_install(p, activate=True))

    def install_themes(self, report: ProvisionReport) -> None:
        for theme in self.site.themes:
            self.stop.checkpoint(f"theme {theme}")
            console.print(f" * Installing theme: '{theme}'")
            customize.attempt(report, f"install theme {theme}", lambda t=theme: self.wp.theme_install(t))
