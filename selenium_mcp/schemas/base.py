"""Strict Pydantic base models."""

from __future__ import annotations

import pydantic
from pydantic.alias_generators import to_camel

__all__ = [
    'StrictModel',
    'ToolArguments',
    'WireModel',
]


class StrictModel(pydantic.BaseModel):
    """Base model with strict validation.

    Config:
    - extra='forbid': Reject unknown fields (fail-fast)
    - strict=True: No implicit type coercion
    - frozen=True: Immutable after creation
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',
        strict=True,
        frozen=True,
    )


class WireModel(StrictModel):
    """Model exchanged with MCP clients using camelCase field names.

    Lax validation: nested objects arrive as plain dicts decoded from JSON.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=False,
    )


class ToolArguments(WireModel):
    """Base for tool argument models.

    Unknown keys are ignored rather than rejected: MCP clients routinely send
    extra metadata alongside declared arguments.
    """

    model_config = pydantic.ConfigDict(extra='ignore')
