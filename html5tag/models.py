"""Pydantic models describing a tag render."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .attributes import Attributes
from .tag import VOID_TAGS


class RenderOptions(BaseModel):
    """Layout switches for a rendered tag."""

    model_config = ConfigDict(populate_by_name=True)

    sort_attributes: bool = Field(
        False,
        alias="sortAttributes",
        description="Write attributes in a stable order instead of insertion order.",
    )
    pretty_print: bool = Field(
        False,
        alias="prettyPrint",
        description="Indent the inner content by two spaces, leaving textarea values alone.",
    )
    no_space: bool = Field(
        False,
        alias="noSpace",
        description="Put the content directly against the opening and closing tags.",
    )

    @classmethod
    def formatted(cls) -> RenderOptions:
        return cls(sort_attributes=True, pretty_print=True)


class TagRenderRequest(BaseModel):
    """Everything needed to write one tag."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    tag: str = Field(..., description="Tag name, e.g. div or input.")
    attributes: Optional[Attributes] = Field(
        None, description="Attributes of the tag; plain mappings go through the validated setter."
    )
    content: Optional[Any] = Field(
        None,
        description="Inner markup: a string, a readable object or an iterable of strings.",
    )
    is_void: Optional[bool] = Field(
        None,
        alias="isVoid",
        description="Write only an opening tag. Defaults to whether the tag is a known void tag.",
    )
    options: RenderOptions = Field(default_factory=RenderOptions)

    @field_validator("tag")
    @classmethod
    def _check_tag(cls, value: str) -> str:
        if not value:
            raise ValueError("tag name cannot be empty")
        if any(char.isspace() or char in "<>/\"'=" for char in value):
            raise ValueError(f"invalid tag name: {value!r}")
        return value

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        if value is None or isinstance(value, Attributes):
            return value
        if isinstance(value, Mapping):
            attributes = Attributes()
            for name, item in value.items():
                attributes.set(str(name), str(item))
            return attributes
        return value

    @model_validator(mode="after")
    def _check_void_content(self) -> TagRenderRequest:
        if self.void and self.content is not None:
            raise ValueError(f"void tag {self.tag!r} cannot have content")
        return self

    @property
    def void(self) -> bool:
        if self.is_void is None:
            return self.tag in VOID_TAGS
        return self.is_void


__all__ = ["RenderOptions", "TagRenderRequest"]
