# app/schemas/report.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, conint, constr

from app.schemas.action import ActionOut
from app.schemas.common import CamelModel

# Allowed enums
Priority = Literal["Low", "Medium", "High", "Critical"]


class ReportCreate(CamelModel):
    """
    Submission payload. Status, responder and timestamps are server-populated.
    """

    category_id: conint(ge=1) = Field(..., description="Category the report is filed under")
    user_id: Optional[conint(ge=1)] = Field(
        default=None, description="Reporting user; ignored when isAnonymous is true"
    )
    description: constr(strip_whitespace=True, min_length=1, max_length=5000) = Field(
        ..., description="What happened"
    )
    location: Optional[constr(strip_whitespace=True, max_length=255)] = None
    priority: Priority = Field(default="Medium", description="Impact level of the incident")
    is_anonymous: bool = False


class ReportStatusUpdate(CamelModel):
    # validated against the configured whitelist by the lifecycle service
    status: constr(strip_whitespace=True, min_length=1)
    responder_id: Optional[conint(ge=1)] = None


class ReportOut(CamelModel):
    """
    Joined read model: the report plus category, reporter and responder display fields.
    """

    id: int
    category_id: int
    user_id: Optional[int] = None
    responder_id: Optional[int] = None
    description: str
    location: Optional[str] = None
    priority: str
    status: str
    created_at: datetime
    resolved_at: Optional[datetime] = None

    reporter_name: str = "Anonymous"
    reporter_department: Optional[str] = None
    reporter_contact: Optional[str] = None
    category_name: Optional[str] = None
    category_role: Optional[str] = None
    category_contact: Optional[str] = None
    responder_name: Optional[str] = None
    responder_role: Optional[str] = None
    action_count: int = 0


class ReportDetailOut(ReportOut):
    actions: List[ActionOut] = []
    response_time_hours: int = Field(
        ..., description="Whole hours from creation to resolution (or now, if unresolved)"
    )
