# app/schemas/stats.py
from typing import List, Optional

from app.schemas.common import CamelModel


class StatusCount(CamelModel):
    status: str
    count: int
    percentage: int


class CategoryCount(CamelModel):
    category_id: int
    name: str
    count: int
    percentage: int


class Totals(CamelModel):
    total_reports: int
    total_users: int
    total_responders: int
    total_actions: int
    total_categories: int


class Summary(CamelModel):
    total_reports: int
    pending_reports: int
    in_progress_reports: int
    under_review_reports: int
    resolved_reports: int
    closed_reports: int
    resolution_rate: int
    average_response_time_hours: float
    average_actions_per_report: float


class SlowReport(CamelModel):
    id: int
    description: str
    status: str
    response_time_hours: int


class CriticalResponder(CamelModel):
    id: int
    name: str
    role: str
    critical_reports: int


class ReportStats(CamelModel):
    totals: Totals
    summary: Summary
    by_status: List[StatusCount]
    by_category: List[CategoryCount]
    above_average_response_time: List[SlowReport]
    critical_responders: List[CriticalResponder]
    valid_statuses: Optional[List[str]] = None
