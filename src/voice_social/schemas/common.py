"""Shared Pydantic building blocks for API payloads."""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Largest fid the storage layer can hold (signed 64-bit).
MAX_FID = 2**63 - 1

# fids travel as strings in JSON responses so clients never lose precision.
FidOut = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]

# Incoming fids may be numbers or numeric strings.
FidIn = Annotated[int, Field(gt=0, le=MAX_FID)]


class APIModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(APIModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Machine-readable error kind")
    message: str = Field(..., description="Human-readable explanation")


ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input"},
    404: {"model": ErrorResponse, "description": "Referenced resource does not exist"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}
