"""Create members and events tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Initial schema for the `database` backend: members (with image_ref)
       and events. Mirrors ngo_api/models/member.py and event.py.
Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("position", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("achievements", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "image_ref",
            sa.String(512),
            nullable=True,
            comment="Public URL of the member's image in the asset store",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_members_created_at", "members", ["created_at"])

    op.create_table(
        "events",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("date", sa.String(50), nullable=False),
        sa.Column("time", sa.String(50), nullable=False),
        sa.Column("location", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("volunteers_needed", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(100), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_events_created_at", "events", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_events_created_at", table_name="events")
    op.drop_table("events")
    op.drop_index("idx_members_created_at", table_name="members")
    op.drop_table("members")
