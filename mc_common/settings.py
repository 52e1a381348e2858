"""Console settings shared by the list-management views."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from mc_common.config.env import parse_int_env
from mc_common.errors import ConfigurationError

DEFAULT_PER_PAGE = 10
DEFAULT_PER_PAGE_OPTIONS = (10, 20, 50, 100)


class ConsoleSettings(BaseModel):
    """Defaults for table views (pagination, path rendering)."""

    default_per_page: int = Field(default=DEFAULT_PER_PAGE, gt=0)
    per_page_options: list[int] = Field(
        default_factory=lambda: list(DEFAULT_PER_PAGE_OPTIONS)
    )
    folder_path_separator: str = Field(default="/", min_length=1)

    @field_validator("per_page_options")
    @classmethod
    def _validate_options(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("per_page_options must not be empty")
        if any(option <= 0 for option in value):
            raise ValueError("per_page_options must be positive")
        return sorted(set(value))

    @model_validator(mode="after")
    def _include_default_option(self) -> "ConsoleSettings":
        if self.default_per_page not in self.per_page_options:
            self.per_page_options = sorted({*self.per_page_options, self.default_per_page})
        return self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConsoleSettings":
        """Build settings from ``MC_*`` environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, object] = {}

        raw_per_page = env.get("MC_DEFAULT_PER_PAGE")
        if raw_per_page is not None:
            per_page = parse_int_env(raw_per_page)
            if per_page is None:
                raise ConfigurationError(
                    "MC_DEFAULT_PER_PAGE must be an integer",
                    context={"value": raw_per_page},
                )
            data["default_per_page"] = per_page

        separator = env.get("MC_FOLDER_PATH_SEPARATOR")
        if separator is not None:
            data["folder_path_separator"] = separator

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid console settings", context=data, cause=exc
            ) from exc
