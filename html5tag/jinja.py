"""Jinja2 globals for rendering tags from templates.

Every helper returns :class:`markupsafe.Markup` so that its output survives
autoescaping. Inner html and control markup passed from a template is escaped
unless it is already ``Markup``, which keeps plain template strings safe.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from jinja2 import BaseLoader, Environment, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

from .attributes import Attributes, value_string
from .tag import LabelMode, render_image, render_label, render_tag, render_void_tag


def _attributes(mapping: Optional[Mapping[str, Any]], extra: Mapping[str, Any]) -> Attributes:
    attributes = Attributes()
    for source in (mapping or {}, extra):
        for name, value in source.items():
            attributes.set(name, "" if value is None else value_string(value))
    return attributes


def _markup_text(value: Any) -> str:
    if value is None:
        return ""
    return str(escape(value))


def tag_global(
    tag: str, attributes: Optional[Mapping[str, Any]] = None, inner_html: Any = "", **extra: Any
) -> Markup:
    return Markup(render_tag(tag, _attributes(attributes, extra), _markup_text(inner_html)))


def void_tag_global(tag: str, attributes: Optional[Mapping[str, Any]] = None, **extra: Any) -> Markup:
    return Markup(render_void_tag(tag, _attributes(attributes, extra)))


def label_global(
    label: str,
    control_html: Any,
    mode: str = "before",
    attributes: Optional[Mapping[str, Any]] = None,
) -> Markup:
    """``mode`` is a :class:`LabelMode` value such as ``"wrap_after"``."""

    rendered = render_label(
        _attributes(attributes, {}), label, _markup_text(control_html), LabelMode(mode)
    )
    return Markup(rendered)


def image_global(
    src: str, alt: str, attributes: Optional[Mapping[str, Any]] = None, **extra: Any
) -> Markup:
    return Markup(render_image(src, alt, _attributes(attributes, extra)))


def attributes_global(attributes: Optional[Mapping[str, Any]] = None, **extra: Any) -> Markup:
    """Render just the attribute string, sorted, for hand written tags."""

    return Markup(_attributes(attributes, extra).sorted_string())


def install_globals(env: Environment) -> Environment:
    env.globals.update(
        render_tag=tag_global,
        render_void_tag=void_tag_global,
        render_label=label_global,
        render_image=image_global,
        attributes=attributes_global,
    )
    return env


def make_environment(loader: Optional[BaseLoader] = None) -> Environment:
    """Create an autoescaping environment with the tag helpers installed."""

    env = Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "jinja"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    return install_globals(env)


__all__ = [
    "attributes_global",
    "image_global",
    "install_globals",
    "label_global",
    "make_environment",
    "tag_global",
    "void_tag_global",
]
