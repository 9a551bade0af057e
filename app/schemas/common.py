# app/schemas/common.py
from __future__ import annotations

from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base for API payloads: snake_case in Python, camelCase on the wire.
    Input accepts both spellings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[T]):
    """
    Success wrapper shared by every endpoint:
    {status: "success", message?, results?, total?, data?}
    """

    status: Literal["success"] = "success"
    message: Optional[str] = None
    results: Optional[int] = None
    total: Optional[int] = None
    data: Optional[T] = None

    @model_serializer(mode="wrap")
    def _drop_empty_keys(self, handler):
        out = handler(self)
        return {k: v for k, v in out.items() if v is not None}


def envelope(
    data=None,
    *,
    message: Optional[str] = None,
    results: Optional[int] = None,
    total: Optional[int] = None,
) -> Envelope:
    return Envelope(data=data, message=message, results=results, total=total)


def listing(rows, *, total: Optional[int] = None, message: Optional[str] = None) -> Envelope:
    return Envelope(data=rows, results=len(rows), total=total, message=message)
