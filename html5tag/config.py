"""YAML loading for render options and attribute literals."""

from __future__ import annotations

from typing import Any

import yaml

from .attributes import Attributes, value_string
from .errors import ValidationError
from .models import RenderOptions


def _load_mapping(text: str, what: str) -> dict[str, Any]:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be a YAML mapping.")
    return data


def load_render_options(text: str) -> RenderOptions:
    """Parse ``sortAttributes: true`` style YAML into :class:`RenderOptions`."""

    return RenderOptions.model_validate(_load_mapping(text, "render options"))


def load_attributes(text: str) -> Attributes:
    """Parse a YAML mapping such as ``{id: main, class: box, disabled: true}``.

    Each entry goes through :meth:`Attributes.set`: ``true`` or an empty value
    makes a boolean attribute and ``false`` leaves the attribute out.
    """

    attributes = Attributes()
    for name, value in _load_mapping(text, "attributes").items():
        attributes.set(str(name), "" if value is None else value_string(value))
    return attributes


__all__ = ["load_attributes", "load_render_options"]
