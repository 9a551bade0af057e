# app/db/seed.py
"""
Default reference data. Safe to run repeatedly: rows are matched by name
and only missing ones are inserted.
"""
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.responder import Responder

log = logging.getLogger("app.db")

DEFAULT_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Facilities", "role": "Maintenance", "contact_info": "facilities@campus.edu"},
    {"name": "Safety & Security", "role": "Campus Security", "contact_info": "security@campus.edu"},
    {"name": "IT Services", "role": "IT Helpdesk", "contact_info": "helpdesk@campus.edu"},
    {"name": "Health & Wellbeing", "role": "Health Services", "contact_info": "health@campus.edu"},
    {"name": "Harassment", "role": "Student Affairs", "contact_info": "studentaffairs@campus.edu"},
]

DEFAULT_RESPONDERS: List[Dict[str, str]] = [
    {"name": "A. Lee", "role": "Security", "contact_info": "a.lee@campus.edu", "department": "Campus Security"},
    {"name": "M. Okafor", "role": "Maintenance", "contact_info": "m.okafor@campus.edu", "department": "Facilities"},
    {"name": "J. Novak", "role": "IT Support", "contact_info": "j.novak@campus.edu", "department": "IT Services"},
]


def seed_categories(db: Session) -> int:
    existing = {name for (name,) in db.query(Category.name).all()}
    created = 0
    for c in DEFAULT_CATEGORIES:
        if c["name"] in existing:
            continue
        db.add(Category(**c))
        created += 1
    db.flush()
    return created


def seed_responders(db: Session) -> int:
    existing = {name for (name,) in db.query(Responder.name).all()}
    created = 0
    for r in DEFAULT_RESPONDERS:
        if r["name"] in existing:
            continue
        db.add(Responder(is_available=True, total_resolved=0, **r))
        created += 1
    db.flush()
    return created


def seed_reference_data(db: Session) -> Dict[str, int]:
    counts = {
        "categories": seed_categories(db),
        "responders": seed_responders(db),
    }
    log.info("seed: %s categories, %s responders created", counts["categories"], counts["responders"])
    return counts
