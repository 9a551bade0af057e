# app/schemas/action.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, conint, constr

from app.schemas.common import CamelModel


class ActionCreate(CamelModel):
    report_id: conint(ge=1)
    responder_id: conint(ge=1)
    description: constr(strip_whitespace=True, min_length=1, max_length=5000) = Field(
        ...,
        validation_alias=AliasChoices("description", "actionDescription"),
        description="What the responder did",
    )
    # defaults to "Investigation" when omitted
    type: Optional[constr(strip_whitespace=True, min_length=1, max_length=50)] = None


class ActionOut(CamelModel):
    id: int
    report_id: int
    responder_id: int
    description: str
    type: str
    timestamp: datetime

    responder_name: Optional[str] = None
    responder_role: Optional[str] = None
    responder_contact: Optional[str] = None
    report_description: Optional[str] = None
    report_status: Optional[str] = None
