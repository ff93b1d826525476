"""Tests for nginx config rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from wpprov_common import LIVE_URL_PLACEHOLDER, ProvisionerSettings
from wpprov.errors import TemplateError
from wpprov.services.nginx_renderer import (
    normalize_live_url,
    render,
    render_redirect_block,
    select_template,
    splice_placeholder,
    write_config,
)


class TestNormalizeLiveUrl:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("https://example.com/", "example.com"),
            ("http://example.com", "example.com"),
            ("example.com///", "example.com"),
            ("https://example.com/sub/", "example.com/sub"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_live_url(raw) == expected


class TestRedirectBlock:
    def test_two_rules(self):
        block = render_redirect_block("https://example.com/")
        assert "rewrite ^/[_0-9a-zA-Z-]+(/wp-content/uploads/.*) $1;" in block
        assert "$scheme://example.com/wp-content/uploads/$1 redirect;" in block
        assert block.count("if (!-e $request_filename) {") == 2
        assert "https://" not in block
        assert "example.com/" + "/" not in block


class TestSplice:
    def test_block_inherits_indentation(self):
        text = "a {\n    {{LIVE_URL}}\n}\n"
        out = splice_placeholder(text, LIVE_URL_PLACEHOLDER, "one\ntwo\n")
        assert out == "a {\n    one\n    two\n}\n"

    def test_text_after_placeholder_follows_block(self):
        out = splice_placeholder("  {{LIVE_URL}} # end\n", LIVE_URL_PLACEHOLDER, "x\ny")
        assert out == "  x\n  y # end\n"

    def test_empty_block_removes_placeholder(self):
        out = splice_placeholder("a\n  {{LIVE_URL}}\nb\n", LIVE_URL_PLACEHOLDER, "")
        assert out == "a\n  \nb\n"

    def test_no_placeholder_unchanged(self):
        text = "server {\n}\n"
        assert splice_placeholder(text, LIVE_URL_PLACEHOLDER, "x") == text

    def test_crlf_line_endings_kept(self):
        out = splice_placeholder("a\r\n {{LIVE_URL}}\r\n", LIVE_URL_PLACEHOLDER, "x\ny")
        assert out == "a\r\n x\n y\r\n"


class TestRender:
    def test_default_template_without_live_url(self, tmp_settings: ProvisionerSettings):
        out = render(tmp_settings, None)
        assert LIVE_URL_PLACEHOLDER not in out
        assert "rewrite" not in out
        assert "try_files $uri =404;" in out

    def test_default_template_with_live_url(self, tmp_settings: ProvisionerSettings):
        out = render(tmp_settings, "https://example.com/")
        assert LIVE_URL_PLACEHOLDER not in out
        assert "    if (!-e $request_filename) {\n" in out
        assert "      rewrite ^/wp-content/uploads/(.*)$ $scheme://example.com/wp-content/uploads/$1 redirect;\n" in out
        assert "https://example.com" not in out

    def test_custom_template_wins(self, tmp_settings: ProvisionerSettings):
        tmp_settings.nginx_custom_template.write_text("server { custom; }\n")
        assert select_template(tmp_settings) == tmp_settings.nginx_custom_template
        assert render(tmp_settings, "https://example.com") == "server { custom; }\n"

    def test_custom_template_placeholder_is_spliced(self, tmp_settings: ProvisionerSettings):
        tmp_settings.nginx_custom_template.write_text("server {\n  {{LIVE_URL}}\n}\n")
        out = render(tmp_settings, None)
        assert out == "server {\n  \n}\n"

    def test_non_utf8_custom_template_round_trips(self, tmp_settings: ProvisionerSettings):
        tmp_settings.nginx_custom_template.write_bytes(b"# caf\xe9\nserver {\n  {{LIVE_URL}}\n}\n")
        write_config(tmp_settings.nginx_output, render(tmp_settings, None))
        assert tmp_settings.nginx_output.read_bytes() == b"# caf\xe9\nserver {\n  \n}\n"

    def test_no_template(self, tmp_settings: ProvisionerSettings):
        tmp_settings.nginx_default_template.unlink()
        with pytest.raises(TemplateError):
            render(tmp_settings, None)


class TestWriteConfig:
    def test_creates_file(self, tmp_path: Path):
        path = tmp_path / "provision" / "vvv-nginx.conf"
        write_config(path, "server { listen 80; }")
        assert path.read_text() == "server { listen 80; }"

    def test_overwrites_and_leaves_no_temp_files(self, tmp_path: Path):
        path = tmp_path / "vvv-nginx.conf"
        path.write_text("old content that is longer than the new one")
        write_config(path, "new")
        assert path.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["vvv-nginx.conf"]
