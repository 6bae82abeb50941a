"""baseline schema: users, leads, assignments, quote requests, orders

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ("admin", "sales_manager", "sales_rep", "lead_assigner", "quote_maker", "viewer")
LEAD_STATUSES = ("new", "quote_made", "negotiation", "won", "lost", "unqualified")
PROPERTY_TYPES = ("residential", "commercial")
LEAD_SOURCES = (
    "scanner",
    "ads",
    "social_media",
    "organic",
    "sunny",
    "word_of_mouth",
    "social_media_ads",
    "architect",
)
WORKFLOW_STATUSES = ("pending", "active", "completed")
QUOTE_TYPES = ("fresh", "revisal")


def _timestamps() -> list[sa.Column]:
    return [sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum(*USER_ROLES, name="user_role"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "leads",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("property_type", sa.Enum(*PROPERTY_TYPES, name="property_type"), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("architect_name", sa.String(length=255), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=False),
        sa.Column("lead_found_through", sa.Enum(*LEAD_SOURCES, name="lead_found_through"), nullable=False),
        sa.Column("status", sa.Enum(*LEAD_STATUSES, name="lead_status"), nullable=False),
        sa.Column("quote_value", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("quote_number", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("next_follow_up_date", sa.Date(), nullable=True),
        sa.Column("lead_created_date", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_leads_status", "leads", ["status"])
    op.create_index("idx_leads_created", "leads", ["lead_created_date"])

    op.create_table(
        "lead_assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["lead_id"], ["leads.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lead_id", name="uq_lead_assignments_lead"),
    )
    op.create_index("idx_lead_assignments_user", "lead_assignments", ["user_id"])

    op.create_table(
        "quote_requests",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=False),
        sa.Column("sales_rep_id", sa.String(length=36), nullable=False),
        sa.Column("quote_maker_id", sa.String(length=36), nullable=True),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("quoted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.Enum(*WORKFLOW_STATUSES, name="quote_request_status"), nullable=False),
        sa.Column("quote_value", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("type", sa.Enum(*QUOTE_TYPES, name="quote_type"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lead_id"], ["leads.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["sales_rep_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["quote_maker_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_quote_requests_status", "quote_requests", ["status"])
    op.create_index("idx_quote_requests_lead", "quote_requests", ["lead_id"])
    op.create_index("idx_quote_requests_sales_rep", "quote_requests", ["sales_rep_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=False),
        sa.Column("sales_rep_id", sa.String(length=36), nullable=False),
        sa.Column("amount_in", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("middleman_cut", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column(
            "total_value",
            sa.Numeric(12, 2),
            sa.Computed("amount_in + tax_amount + middleman_cut"),
            nullable=True,
        ),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("status", sa.Enum(*WORKFLOW_STATUSES, name="order_status"), nullable=False),
        sa.Column("amount_recieved", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("final_size_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lead_id"], ["leads.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["sales_rep_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lead_id", name="uq_orders_lead"),
    )
    op.create_index("idx_orders_sales_rep", "orders", ["sales_rep_id"])
    op.create_index("idx_orders_order_date", "orders", ["order_date"])


def downgrade() -> None:
    op.drop_index("idx_orders_order_date", table_name="orders")
    op.drop_index("idx_orders_sales_rep", table_name="orders")
    op.drop_table("orders")
    op.drop_index("idx_quote_requests_sales_rep", table_name="quote_requests")
    op.drop_index("idx_quote_requests_lead", table_name="quote_requests")
    op.drop_index("idx_quote_requests_status", table_name="quote_requests")
    op.drop_table("quote_requests")
    op.drop_index("idx_lead_assignments_user", table_name="lead_assignments")
    op.drop_table("lead_assignments")
    op.drop_index("idx_leads_created", table_name="leads")
    op.drop_index("idx_leads_status", table_name="leads")
    op.drop_table("leads")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
    for enum_name in (
        "order_status",
        "quote_type",
        "quote_request_status",
        "lead_found_through",
        "lead_status",
        "property_type",
        "user_role",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
