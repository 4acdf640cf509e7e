"""Shared Jinja2 template loading with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build an autoescaping Jinja2 environment, site overrides first.

    User overrides are loaded from ``.cloverville/templates/`` inside the
    site.  Both a namespaced directory (for example
    ``.cloverville/templates/cards/``) and the shared root are searched
    before the packaged defaults.
    """

    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".cloverville" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("cloverville", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), autoescape=True, keep_trailing_newline=False)
