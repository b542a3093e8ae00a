"""Base model for camelCase JSON contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Accepts snake_case or camelCase input, serialises camelCase by alias."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = ["ApiModel"]
