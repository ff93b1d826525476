"""WP-CLI wrappers, run inside the site's public_html as the sandbox user."""

from __future__ import annotations

from pathlib import Path

from wpprov.services.executor import CommandExecutor, CommandResult


class WpCli:
    def __init__(self, executor: CommandExecutor, path: Path, binary: str = "wp"):
        self.executor = executor
        self.path = path
        self.binary = binary

    def argv(self, *args: str) -> list[str]:
        return [self.binary, *args]

    def run(self, *args: str, stdin: str | None = None) -> CommandResult:
        """Run without raising; callers inspect the exit code."""
        return self.executor.run(self.argv(*args), cwd=self.path, stdin=stdin)

    def check(self, *args: str, stdin: str | None = None) -> CommandResult:
        return self.executor.check(self.argv(*args), cwd=self.path, stdin=stdin)

    # -- core -------------------------------------------------------------

    def core_download(self, version: str, locale: str) -> None:
        self.check("core", "download", f"--locale={locale}", f"--version={version}", f"--path={self.path}")

    def core_config(self, db_name: str, db_prefix: str, db_user: str, db_password: str, extra_php: str) -> None:
        self.check(
            "core", "config",
            f"--dbname={db_name}",
            f"--dbprefix={db_prefix}",
            f"--dbuser={db_user}",
            f"--dbpass={db_password}",
            "--extra-php",
            stdin=extra_php,
        )

    def is_installed(self) -> bool:
        return self.run("core", "is-installed").ok

    def core_install(self, url: str, title: str, admin_user: str, admin_email: str, admin_password: str) -> None:
        self.check(
            "core", "install",
            f"--url={url}",
            f"--title={title}",
            f"--admin_user={admin_user}",
            f"--admin_email={admin_email}",
            f"--admin_password={admin_password}",
        )

    def multisite_install(
        self,
        url: str,
        title: str,
        admin_user: str,
        admin_email: str,
        admin_password: str,
        *,
        subdomains: bool,
    ) -> None:
        args = ["core", "multisite-install"]
        if subdomains:
            args.append("--subdomains")
        args.extend([
            f"--url={url}",
            f"--title={title}",
            f"--admin_user={admin_user}",
            f"--admin_email={admin_email}",
            f"--admin_password={admin_password}",
        ])
        self.check(*args)

    def core_version(self) -> str:
        return self.check("core", "version").stdout.strip()

    def core_update(self, version: str, *, force: bool = False) -> None:
        args = ["core", "update", f"--version={version}"]
        if force:
            args.append("--force")
        self.check(*args)

    # -- config / db ------------------------------------------------------

    def config_set(self, name: str, value: str, *, raw: bool = False) -> None:
        args = ["config", "set", name, value]
        if raw:
            args.append("--raw")
        self.check(*args)

    def db_import(self, dump: Path) -> None:
        self.check("db", "import", str(dump))

    # -- plugins / themes -------------------------------------------------

    def plugin_install(self, plugin: str, *, activate: bool = False) -> None:
        args = ["plugin", "install", plugin]
        if activate:
            args.append("--activate")
        self.check(*args)

    def plugin_activate(self, plugin: str) -> None:
        self.check("plugin", "activate", plugin)

    def plugin_delete(self, plugin: str) -> None:
        self.check("plugin", "delete", plugin)

    def theme_install(self, theme: str, *, activate: bool = False) -> None:
        args = ["theme", "install", theme]
        if activate:
            args.append("--activate")
        self.check(*args)

    def theme_delete(self, theme: str) -> None:
        self.check("theme", "delete", theme)

    # -- content ----------------------------------------------------------

    def import_wxr(self, path: Path) -> None:
        self.check("import", str(path), "--authors=create")

    def user_id(self, login: str) -> str:
        return self.check("user", "get", login, "--field=ID").stdout.strip()

    def create_page(self, title: str, author_id: str) -> None:
        self.check(
            "post", "create",
            "--post_type=page",
            "--post_status=publish",
            f"--post_author={author_id}",
            f"--post_title={title}",
        )

    def page_id(self, slug: str) -> str:
        return self.check(
            "post", "list",
            "--post_type=page",
            "--post_status=publish",
            "--posts_per_page=1",
            f"--pagename={slug}",
            "--field=ID",
        ).stdout.strip()

    def page_ids(self) -> list[str]:
        out = self.check(
            "post", "list",
            "--order=ASC",
            "--orderby=date",
            "--post_type=page",
            "--post_status=publish",
            "--posts_per_page=-1",
            "--format=ids",
        ).stdout
        return out.split()

    def option_update(self, name: str, value: str) -> None:
        self.check("option", "update", name, value)

    def option_add(self, name: str, value: str) -> None:
        self.check("option", "add", name, value)

    def menu_create(self, name: str) -> None:
        self.check("menu", "create", name)

    def menu_add_post(self, menu: str, post_id: str) -> None:
        self.check("menu", "item", "add-post", menu, post_id)

    def menu_assign(self, menu: str, location: str) -> None:
        self.check("menu", "location", "assign", menu, location)

    def term_create(self, taxonomy: str, name: str) -> None:
        self.check("term", "create", taxonomy, name)

    def term_id(self, taxonomy: str, name: str) -> str:
        return self.check("term", "list", taxonomy, f"--name={name}", "--field=term_id").stdout.strip()
