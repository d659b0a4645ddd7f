"""Resources schema — resources and ordered resource_tags.

Revision ID: 001_resources
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_resources"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resources",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("subject", sa.String(50), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("url", sa.Text, nullable=True),
        sa.Column("file_url", sa.Text, nullable=True),
        sa.Column("file_name", sa.String(100), nullable=True),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_resources_owner_created", "resources", ["owner_id", "created_at"])
    op.create_index("ix_resources_subject", "resources", ["subject"])
    op.create_index("ix_resources_type", "resources", ["type"])

    op.create_table(
        "resource_tags",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "resource_id", sa.Uuid(as_uuid=True),
            sa.ForeignKey("resources.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("value", sa.String(20), nullable=False),
    )
    op.create_index("ix_resource_tags_value", "resource_tags", ["value"])


def downgrade() -> None:
    op.drop_index("ix_resource_tags_value", table_name="resource_tags")
    op.drop_table("resource_tags")
    op.drop_index("ix_resources_type", table_name="resources")
    op.drop_index("ix_resources_subject", table_name="resources")
    op.drop_index("ix_resources_owner_created", table_name="resources")
    op.drop_table("resources")
