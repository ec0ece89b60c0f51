"""Initial schema: categories, users, events, versions, platform statuses, alerts

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-09-02 10:14:37.512204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "category",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "role IN ('viewer', 'developer', 'analyst', 'admin')", name="user_role_check"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "event",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("category_id", sa.String(), nullable=False),
        sa.Column("block", sa.String(length=255), nullable=True),
        sa.Column("action", sa.String(length=255), nullable=False),
        sa.Column(
            "action_description", sa.Text(), server_default="", nullable=False
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("value_description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("author_id", sa.String(), nullable=True),
        sa.Column("platforms", sa.JSON(), nullable=False),
        sa.Column("properties", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "current_version", sa.Integer(), server_default="1", nullable=False
        ),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["author_id"], ["user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_event_category_id"), "event", ["category_id"])
    op.create_index(op.f("ix_event_owner_id"), "event", ["owner_id"])
    op.create_index(op.f("ix_event_author_id"), "event", ["author_id"])
    op.create_index("ix_event_category_action", "event", ["category_id", "action"])

    op.create_table(
        "event_version",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.String(), nullable=False),
        sa.Column("block", sa.String(length=255), nullable=True),
        sa.Column("action", sa.String(length=255), nullable=False),
        sa.Column(
            "action_description", sa.Text(), server_default="", nullable=False
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("value_description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("platforms", sa.JSON(), nullable=False),
        sa.Column("properties", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("change_description", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["author_id"], ["user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "event_id", "version", name="uq_event_version_event_version"
        ),
    )
    op.create_index(op.f("ix_event_version_event_id"), "event_version", ["event_id"])

    op.create_table(
        "event_platform_status",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("platform", sa.String(length=20), nullable=False),
        sa.Column("jira_link", sa.String(length=1024), nullable=True),
        sa.Column(
            "implementation_status",
            sa.String(length=30),
            server_default="draft",
            nullable=False,
        ),
        sa.Column(
            "validation_status",
            sa.String(length=30),
            server_default="pending",
            nullable=False,
        ),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "event_id",
            "version_number",
            "platform",
            name="uq_event_platform_status_event_version_platform",
        ),
    )
    op.create_index(
        op.f("ix_event_platform_status_event_id"),
        "event_platform_status",
        ["event_id"],
    )

    op.create_table(
        "status_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_platform_status_id", sa.String(), nullable=False),
        sa.Column("status_type", sa.String(length=20), nullable=False),
        sa.Column("old_status", sa.String(length=30), nullable=True),
        sa.Column("new_status", sa.String(length=30), nullable=False),
        sa.Column("changed_by_user_id", sa.String(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("jira_link", sa.String(length=1024), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["event_platform_status_id"], ["event_platform_status.id"]
        ),
        sa.ForeignKeyConstraint(
            ["changed_by_user_id"], ["user.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_status_history_event_platform_status_id"),
        "status_history",
        ["event_platform_status_id"],
    )

    op.create_table(
        "comment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_comment_event_id"), "comment", ["event_id"])

    op.create_table(
        "alert",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=True),
        sa.Column("platform", sa.String(length=20), nullable=False),
        sa.Column("event_category", sa.String(length=255), nullable=False),
        sa.Column("event_action", sa.String(length=255), nullable=False),
        sa.Column("yesterday_count", sa.Integer(), nullable=False),
        sa.Column("day_before_count", sa.Integer(), nullable=False),
        sa.Column("drop_percent", sa.Integer(), nullable=False),
        sa.Column(
            "checked_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "is_resolved", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_alert_event_id"), "alert", ["event_id"])
    op.create_index(op.f("ix_alert_checked_at"), "alert", ["checked_at"])

    op.create_table(
        "alert_settings",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("matomo_url", sa.String(length=1024), nullable=True),
        sa.Column("matomo_token", sa.String(length=255), nullable=True),
        sa.Column("matomo_site_ids", sa.String(length=255), nullable=True),
        sa.Column(
            "drop_threshold", sa.Integer(), server_default="30", nullable=False
        ),
        sa.Column(
            "max_concurrency", sa.Integer(), server_default="5", nullable=False
        ),
        sa.Column(
            "is_enabled", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "drop_threshold BETWEEN 0 AND 100", name="alert_settings_threshold_check"
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop initial schema."""
    op.drop_table("alert_settings")
    op.drop_index(op.f("ix_alert_checked_at"), table_name="alert")
    op.drop_index(op.f("ix_alert_event_id"), table_name="alert")
    op.drop_table("alert")
    op.drop_index(op.f("ix_comment_event_id"), table_name="comment")
    op.drop_table("comment")
    op.drop_index(
        op.f("ix_status_history_event_platform_status_id"),
        table_name="status_history",
    )
    op.drop_table("status_history")
    op.drop_index(
        op.f("ix_event_platform_status_event_id"), table_name="event_platform_status"
    )
    op.drop_table("event_platform_status")
    op.drop_index(op.f("ix_event_version_event_id"), table_name="event_version")
    op.drop_table("event_version")
    op.drop_index("ix_event_category_action", table_name="event")
    op.drop_index(op.f("ix_event_author_id"), table_name="event")
    op.drop_index(op.f("ix_event_owner_id"), table_name="event")
    op.drop_index(op.f("ix_event_category_id"), table_name="event")
    op.drop_table("event")
    op.drop_table("user")
    op.drop_table("category")
