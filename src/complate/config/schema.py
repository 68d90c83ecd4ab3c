"""Pydantic schemas for ``.complate/config.yaml``.

Example:

    version: "0.1"
    templates:
      greet:
        content:
          inline: "Hello {{ name }}"
        values:
          name:
            prompt: "Who to greet?"
            static: "World"
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _scalar_to_str(value: Any) -> Any:
    # YAML turns `static: 42` into an int and `static: yes` into a bool
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ContentSchema(BaseModel):
    """Template body, inline or from a file next to the config."""

    model_config = ConfigDict(extra="forbid")

    inline: str | None = None
    file: str | None = None

    @model_validator(mode="after")
    def check_exactly_one_source(self) -> "ContentSchema":
        if (self.inline is None) == (self.file is None):
            raise ValueError("content must define exactly one of 'inline' or 'file'")
        return self


class ValueSchema(BaseModel):
    """Declaration of one template variable."""

    model_config = ConfigDict(extra="forbid")

    prompt: str | None = None
    static: str | None = None
    shell: str | None = None
    required: bool = True
    options: list[str] = Field(default_factory=list)

    @field_validator("static", mode="before")
    @classmethod
    def coerce_static(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_scalar_to_str(item) for item in value]
        return value

    @model_validator(mode="after")
    def check_single_default(self) -> "ValueSchema":
        if self.static is not None and self.shell is not None:
            raise ValueError("a value may define 'static' or 'shell', not both")
        if self.shell is not None and not self.shell.strip():
            raise ValueError("'shell' command cannot be empty")
        return self


class TemplateSchema(BaseModel):
    """One named template."""

    model_config = ConfigDict(extra="forbid")

    content: ContentSchema
    values: dict[str, ValueSchema] = Field(default_factory=dict)


class ConfigSchema(BaseModel):
    """Top-level configuration document."""

    version: str | int | float = "0.1"
    templates: dict[str, TemplateSchema] = Field(default_factory=dict)
