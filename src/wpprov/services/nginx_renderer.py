"""nginx site config rendering with the optional live-URL media redirect."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from wpprov_common import LIVE_URL_PLACEHOLDER, ProvisionerSettings

from wpprov.errors import ResourceError, TemplateError
from wpprov.services.templating import render_template

_SCHEME_RE = re.compile(r"^https?://")


def normalize_live_url(live_url: str) -> str:
    """Drop the scheme and trailing slashes: ``https://example.com/`` -> ``example.com``."""
    return _SCHEME_RE.sub("", live_url.strip()).rstrip("/")


def render_redirect_block(live_url: str) -> str:
    """Render the two rewrite rules that send missing uploads to the live host."""
    return render_template("live_url_redirect.conf.j2", host=normalize_live_url(live_url))


def splice_placeholder(text: str, placeholder: str, block: str) -> str:
    """Replace ``placeholder`` with a multi-line ``block``, line by line.

    Each block line is prefixed with whatever preceded the placeholder on its
    source line, so the block inherits the placeholder's indentation. Text
    following the placeholder stays after the last block line. An empty block
    removes the placeholder and leaves the rest of the line alone.
    """
    block_lines = block.rstrip("\n").split("\n") if block else []
    out: list[str] = []
    for line in text.splitlines(keepends=True):
        if placeholder not in line:
            out.append(line)
            continue
        body = line.rstrip("\r\n")
        ending = line[len(body):]
        head, _, tail = body.partition(placeholder)
        if not block_lines:
            out.append(f"{head}{tail}".replace(placeholder, "") + ending)
            continue
        spliced = [f"{head}{b}" for b in block_lines]
        spliced[-1] += tail.replace(placeholder, "")
        out.append("\n".join(spliced) + ending)
    return "".join(out)


def select_template(settings: ProvisionerSettings) -> Path:
    """Custom override if the site ships one, else the default template."""
    if settings.nginx_custom_template.is_file():
        return settings.nginx_custom_template
    if settings.nginx_default_template.is_file():
        return settings.nginx_default_template
    raise TemplateError(
        f"No nginx template found: neither {settings.nginx_custom_template} "
        f"nor {settings.nginx_default_template} exists"
    )


def render(settings: ProvisionerSettings, live_url: str | None = None) -> str:
    """Return the full nginx config text for the site.

    Bytes that are not UTF-8 survive as surrogate escapes and are written back
    unchanged by :func:`write_config`.
    """
    source = select_template(settings)
    try:
        text = source.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise TemplateError(f"Cannot read nginx template {source}: {exc}") from exc
    block = render_redirect_block(live_url) if live_url else ""
    return splice_placeholder(text, LIVE_URL_PLACEHOLDER, block)


def write_config(path: Path, content: str) -> None:
    """Atomically replace ``path`` with ``content``."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as exc:
        raise ResourceError(f"Cannot write {path}: {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(content)
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
