# app/schemas/audit.py
from datetime import datetime
from typing import Any, Dict, Optional

from app.schemas.common import CamelModel


class AuditLogOut(CamelModel):
    id: int
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime
