"""Tests for SiteConfig resolution."""

from __future__ import annotations

import pytest

from wpprov_common import DB_NAME_FORBIDDEN, InstallMode, ProvisionerSettings
from wpprov.errors import ConfigError
from wpprov.services.config_store import YamlConfigStore
from wpprov.services.resolver import load_site, primary_domain, resolve


def _resolve(site: dict, site_id: str = "demo"):
    return resolve(site_id, YamlConfigStore({"sites": {site_id: site}}, site_id))


class TestDefaults:
    def test_empty_site(self):
        site = _resolve({})
        assert site.domain == "demo.test"
        assert site.title == "demo.test"
        assert site.wp_version == "latest"
        assert site.locale == "en_US"
        assert site.install_mode is InstallMode.SINGLE
        assert site.db_name == "demo"
        assert site.db_prefix == "wp_"
        assert site.admin_user == "admin"
        assert site.admin_password == "password"
        assert site.admin_email == "admin@local.test"
        assert site.plugins == ()
        assert site.themes == ()
        assert site.live_url is None
        assert site.constants == ()
        assert site.options == {}
        assert not site.install_test_content

    def test_explicit_values(self):
        site = _resolve(
            {
                "hosts": ["blog.test", "www.blog.test"],
                "custom": {
                    "site_title": "My Blog",
                    "wp_version": "6.2",
                    "locale": "fr_FR",
                    "wp_type": "subdomain",
                    "db_prefix": "blog_",
                    "admin_user": "root",
                    "install_plugins": ["query-monitor"],
                    "install_themes": ["twentytwentyfour"],
                    "live_url": "https://blog.example.com/",
                    "wpconfig_constants": {"WP_DEBUG_LOG": True, "FOO": "bar"},
                    "install_test_content": True,
                },
            }
        )
        assert site.domain == "blog.test"
        assert site.title == "My Blog"
        assert site.wp_version == "6.2"
        assert site.install_mode is InstallMode.SUBDOMAIN
        assert site.db_prefix == "blog_"
        assert site.admin_user == "root"
        assert site.plugins == ("query-monitor",)
        assert site.themes == ("twentytwentyfour",)
        assert site.live_url == "https://blog.example.com/"
        assert site.constants == (("WP_DEBUG_LOG", "true"), ("FOO", "bar"))
        assert site.install_test_content

    def test_title_defaults_to_domain(self):
        assert _resolve({"hosts": ["x.test"]}).title == "x.test"

    def test_secrets_become_options(self):
        site = _resolve({"custom": {"acfprolicense": "abc", "rggformskey": ""}})
        assert site.options == {"acf_pro_license": "abc"}

    def test_false_flag_stays_off(self):
        site = _resolve({"custom": {"initial_base_setup": False, "delete_default_themes": "yes"}})
        assert not site.initial_base_setup
        assert site.delete_default_themes


class TestDomain:
    def test_first_host(self):
        store = YamlConfigStore({"sites": {"demo": {"hosts": ["a.test", "b.test"]}}}, "demo")
        assert primary_domain("demo", store) == "a.test"

    def test_synthesized(self):
        store = YamlConfigStore({"sites": {"demo": {}}}, "demo")
        assert primary_domain("demo", store) == "demo.test"


class TestDatabaseName:
    @pytest.mark.parametrize(
        "raw",
        ["my.site", "a/b\\c", "<x>:y", "q\"u'o|t?e!s*", "wp.example.test"],
    )
    def test_forbidden_characters_removed(self, raw):
        site = _resolve({"custom": {"db_name": raw}})
        assert site.db_name
        assert not any(ch in site.db_name for ch in DB_NAME_FORBIDDEN)

    def test_site_id_sanitized(self):
        assert _resolve({}, site_id="my.site").db_name == "mysite"

    def test_exact_result(self):
        assert _resolve({"custom": {"db_name": 'a\\/.<>:"\'|?!*b'}}).db_name == "ab"

    def test_empty_after_sanitization(self):
        with pytest.raises(ConfigError, match="empty after sanitization"):
            _resolve({"custom": {"db_name": "..."}})


class TestErrors:
    def test_unknown_install_mode(self):
        with pytest.raises(ConfigError, match="Unknown wp_type"):
            _resolve({"custom": {"wp_type": "cluster"}})

    def test_missing_site_id(self):
        with pytest.raises(ConfigError):
            resolve("", YamlConfigStore({}, ""))

    def test_unreadable_store(self, tmp_settings: ProvisionerSettings):
        with pytest.raises(ConfigError):
            load_site(tmp_settings)


class TestLoadSite:
    def test_reads_settings_paths(self, tmp_settings: ProvisionerSettings, write_store):
        write_store({"hosts": ["my-site.test"], "custom": {"wp_type": "none"}})
        site = load_site(tmp_settings)
        assert site.site_id == "my-site"
        assert site.install_mode is InstallMode.NONE
        assert site.db_name == "my-site"
