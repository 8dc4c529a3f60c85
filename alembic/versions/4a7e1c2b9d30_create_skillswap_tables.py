"""Create users, swap_requests, admin_messages and content_reports tables

Revision ID: 4a7e1c2b9d30
Revises:
Create Date: 2026-02-01

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a7e1c2b9d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("profile_photo", sa.String(), nullable=True),
        sa.Column("skills_offered", sa.JSON(), nullable=False),
        sa.Column("skills_wanted", sa.JSON(), nullable=False),
        sa.Column("availability", sa.JSON(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("is_banned", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("total_swaps", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_users_is_public"), "users", ["is_public"], unique=False)
    op.create_index(op.f("ix_users_is_banned"), "users", ["is_banned"], unique=False)

    op.create_table(
        "swap_requests",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("from_user_id", sa.String(), nullable=False),
        sa.Column("to_user_id", sa.String(), nullable=False),
        sa.Column("skill_offered", sa.String(), nullable=False),
        sa.Column("skill_wanted", sa.String(), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_swap_requests_from_user_id"), "swap_requests", ["from_user_id"], unique=False)
    op.create_index(op.f("ix_swap_requests_to_user_id"), "swap_requests", ["to_user_id"], unique=False)
    op.create_index(op.f("ix_swap_requests_status"), "swap_requests", ["status"], unique=False)
    op.create_index(op.f("ix_swap_requests_created_at"), "swap_requests", ["created_at"], unique=False)

    op.create_table(
        "admin_messages",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_admin_messages_is_active"), "admin_messages", ["is_active"], unique=False)

    op.create_table(
        "content_reports",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("content_type", sa.String(), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("reported_by", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reported_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_content_reports_user_id"), "content_reports", ["user_id"], unique=False)
    op.create_index(op.f("ix_content_reports_status"), "content_reports", ["status"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_content_reports_status"), table_name="content_reports")
    op.drop_index(op.f("ix_content_reports_user_id"), table_name="content_reports")
    op.drop_table("content_reports")
    op.drop_index(op.f("ix_admin_messages_is_active"), table_name="admin_messages")
    op.drop_table("admin_messages")
    op.drop_index(op.f("ix_swap_requests_created_at"), table_name="swap_requests")
    op.drop_index(op.f("ix_swap_requests_status"), table_name="swap_requests")
    op.drop_index(op.f("ix_swap_requests_to_user_id"), table_name="swap_requests")
    op.drop_index(op.f("ix_swap_requests_from_user_id"), table_name="swap_requests")
    op.drop_table("swap_requests")
    op.drop_index(op.f("ix_users_is_banned"), table_name="users")
    op.drop_index(op.f("ix_users_is_public"), table_name="users")
    op.drop_table("users")
