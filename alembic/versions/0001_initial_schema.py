"""initial schema: categories, users, responders, reports, actionstaken, audit_logs

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _has_table(name: str) -> bool:
    return name in sa.inspect(op.get_bind()).get_table_names()


def upgrade():
    if not _has_table("categories"):
        op.create_table(
            "categories",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("role", sa.String(length=100), nullable=False),
            sa.Column("contact_info", sa.String(length=255), nullable=False),
        )
        op.create_index("ix_categories_id", "categories", ["id"])
        op.create_index("ix_categories_name", "categories", ["name"], unique=True)

    if not _has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("pseudonym", sa.String(length=100), nullable=False),
            sa.Column("campus_dept", sa.String(length=100), nullable=True),
            sa.Column("optional_contact", sa.String(length=255), nullable=True),
            sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
            sa.Column("created_at", sa.DateTime, nullable=False),
        )

    if not _has_table("responders"):
        op.create_table(
            "responders",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("role", sa.String(length=100), nullable=False),
            sa.Column("contact_info", sa.String(length=255), nullable=False),
            sa.Column("department", sa.String(length=100), nullable=True),
            sa.Column("is_available", sa.Boolean, nullable=False, server_default=sa.true()),
            sa.Column("total_resolved", sa.Integer, nullable=False, server_default=sa.text("0")),
        )
        op.create_index("ix_responders_id", "responders", ["id"])
        op.create_index("ix_responders_name", "responders", ["name"])

    if not _has_table("reports"):
        op.create_table(
            "reports",
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("category_id", sa.Integer, nullable=False),
            sa.Column("user_id", sa.Integer, nullable=True),
            sa.Column("responder_id", sa.Integer, nullable=True),
            sa.Column("description", sa.Text, nullable=False),
            sa.Column("location", sa.String(length=255), nullable=True),
            sa.Column("priority", sa.String(length=20), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False),
            sa.Column("created_at", sa.DateTime, nullable=False),
            sa.Column("resolved_at", sa.DateTime, nullable=True),
            sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["responder_id"], ["responders.id"], ondelete="SET NULL"),
        )
        for col in ("category_id", "user_id", "responder_id", "priority", "status", "created_at"):
            op.create_index(f"ix_reports_{col}", "reports", [col])
        op.create_index("ix_reports_status_created", "reports", ["status", "created_at"])
        op.create_index("ix_reports_responder_priority", "reports", ["responder_id", "priority"])

    if not _has_table("actionstaken"):
        op.create_table(
            "actionstaken",
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("report_id", sa.Integer, nullable=False),
            sa.Column("responder_id", sa.Integer, nullable=False),
            sa.Column("description", sa.Text, nullable=False),
            sa.Column("type", sa.String(length=50), nullable=False),
            sa.Column("timestamp", sa.DateTime, nullable=False),
            sa.ForeignKeyConstraint(["report_id"], ["reports.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["responder_id"], ["responders.id"]),
        )
        for col in ("report_id", "responder_id", "timestamp"):
            op.create_index(f"ix_actionstaken_{col}", "actionstaken", [col])

    if not _has_table("audit_logs"):
        op.create_table(
            "audit_logs",
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("action", sa.String(length=50), nullable=False),
            sa.Column("entity_type", sa.String(length=50), nullable=True),
            sa.Column("entity_id", sa.Integer, nullable=True),
            sa.Column("meta", sa.JSON, nullable=True),
            sa.Column("ip_address", sa.String(length=64), nullable=True),
            sa.Column("created_at", sa.DateTime, nullable=False),
        )
        op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
        op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])
        op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])


def downgrade():
    for table in ("audit_logs", "actionstaken", "reports", "responders", "users", "categories"):
        if _has_table(table):
            op.drop_table(table)
