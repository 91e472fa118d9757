"""Config schema."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T", bound="_JsonMixin")

# Nominal media sizes, decimal units.
DEFAULT_PRESETS: dict[str, str] = {
    "cd700": "700m",
    "dvd5": "4700m",
    "dvd9": "8540m",
    "bdr25": "25g",
    "bdr50": "50g",
}


class _JsonMixin(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls: type[T], data: str) -> T:
        return cls.model_validate_json(data)


class FitConfig(_JsonMixin):
    # Default disk size or preset name when -s is not given
    size: str | None = None
    recursive: bool = False
    max_disks: int = Field(default=9999, ge=1, le=9999)
    # User presets are merged over the built-in media presets
    presets: dict[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("size", mode="before")
    @classmethod
    def _size_as_text(cls, value: object) -> object:
        # YAML reads ``size: 100`` as an int
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("presets", mode="before")
    @classmethod
    def _presets_as_text(cls, value: object) -> object:
        if isinstance(value, dict):
            return {k: str(v) if isinstance(v, int) else v for k, v in value.items()}
        return value

    @field_validator("presets")
    @classmethod
    def _merge_presets(cls, value: dict[str, str]) -> dict[str, str]:
        merged = dict(DEFAULT_PRESETS)
        merged.update({k.lower(): v for k, v in value.items()})
        return merged
