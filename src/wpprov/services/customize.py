"""Best-effort follow-up steps run after a fresh install.

Every helper here reports a failing command through the run report and
carries on: the site is already installed when these run, so a cosmetic step
must never leave it un-provisioned.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console

from wpprov_common import ProvisionReport, SiteConfig
from wpprov_common.constants import (
    BASE_SETUP_ADDED_OPTIONS,
    BASE_SETUP_CATEGORY,
    BASE_SETUP_MENU,
    BASE_SETUP_MENU_LOCATION,
    BASE_SETUP_MENU_SLUG,
    BASE_SETUP_OPTIONS,
    BASE_SETUP_PAGES,
    DEFAULT_PLUGINS,
    DEFAULT_THEMES,
    IMPORTER_PLUGIN,
    TEST_CONTENT_FILE,
    TEST_CONTENT_URL,
)

from wpprov.errors import CommandError
from wpprov.services.wp import WpCli

console = Console()


def attempt(report: ProvisionReport, label: str, fn: Callable[[], None]) -> bool:
    """Run ``fn``; on a command failure record a warning and return False."""
    try:
        fn()
        return True
    except CommandError as exc:
        message = f"{label} failed (exit {exc.exit_code})"
        console.print(f"   [yellow]! {message}[/yellow]")
        report.warn(message)
        return False


def delete_default_plugins(wp: WpCli, report: ProvisionReport) -> None:
    console.print(" * Deleting the default plugins akismet and hello dolly")
    for plugin in DEFAULT_PLUGINS:
        attempt(report, f"delete plugin {plugin}", lambda p=plugin: wp.plugin_delete(p))


def delete_default_themes(wp: WpCli, report: ProvisionReport) -> None:
    console.print(" * Deleting the default themes except the latest")
    for theme in DEFAULT_THEMES:
        attempt(report, f"delete theme {theme}", lambda t=theme: wp.theme_delete(t))


def import_test_content(wp: WpCli, report: ProvisionReport) -> None:
    """Download the wptest fixture, import it, and always remove the file.

    The fixture is deleted even when the import only partly succeeds, so the
    next run does not import it a second time.
    """
    fixture = wp.path / TEST_CONTENT_FILE
    console.print(f" * Downloading test content from {TEST_CONTENT_URL}")

    def _import() -> None:
        wp.executor.check(["curl", "-fsSL", "-o", str(fixture), TEST_CONTENT_URL], cwd=wp.path)
        console.print(f" * Installing and activating the {IMPORTER_PLUGIN}")
        wp.plugin_install(IMPORTER_PLUGIN)
        wp.plugin_activate(IMPORTER_PLUGIN)
        console.print(" * Importing test data")
        wp.import_wxr(fixture)

    try:
        if attempt(report, "test content import", _import):
            console.print(" * Test content installed")
    finally:
        console.print(f" * Cleaning up {TEST_CONTENT_FILE}")
        cleanup = wp.executor.run(["rm", "-f", str(fixture)], cwd=wp.path)
        if not cleanup.ok:
            report.warn(f"could not remove {fixture} (exit {cleanup.exit_code})")


def _create_pages(wp: WpCli, site: SiteConfig) -> None:
    author = wp.user_id(site.admin_user)
    for title in BASE_SETUP_PAGES:
        wp.create_page(title.strip(), author)


def _assign_front_page(wp: WpCli) -> None:
    wp.option_update("show_on_front", "page")
    wp.option_update("page_on_front", wp.page_id("home"))
    wp.option_update("page_for_posts", wp.page_id("blog"))


def _build_menu(wp: WpCli) -> None:
    wp.menu_create(BASE_SETUP_MENU)
    for page_id in wp.page_ids():
        wp.menu_add_post(BASE_SETUP_MENU_SLUG, page_id)
    wp.menu_assign(BASE_SETUP_MENU_SLUG, BASE_SETUP_MENU_LOCATION)


def _default_category(wp: WpCli) -> None:
    wp.term_create("category", BASE_SETUP_CATEGORY)
    wp.option_update("default_category", wp.term_id("category", BASE_SETUP_CATEGORY.lower()))


def base_setup(wp: WpCli, site: SiteConfig, report: ProvisionReport) -> None:
    """Seed pages, navigation, a default category and site options."""
    console.print(" * Running the initial base setup")
    if site.base_setup_theme:
        attempt(
            report,
            f"install theme {site.base_setup_theme}",
            lambda: wp.theme_install(site.base_setup_theme, activate=True),
        )
    for plugin in site.base_setup_plugins:
        attempt(report, f"install plugin {plugin}", lambda p=plugin: wp.plugin_install(p, activate=True))

    attempt(report, "create pages", lambda: _create_pages(wp, site))
    attempt(report, "assign front and posts pages", lambda: _assign_front_page(wp))
    attempt(report, "build navigation menu", lambda: _build_menu(wp))
    attempt(report, "create default category", lambda: _default_category(wp))

    for name, value in BASE_SETUP_OPTIONS:
        attempt(report, f"update option {name}", lambda n=name, v=value: wp.option_update(n, v))
    for name, value in (*BASE_SETUP_ADDED_OPTIONS, *site.options.items()):
        attempt(report, f"add option {name}", lambda n=name, v=value: wp.option_add(n, v))
    console.print(" * Build defaults initiated")
