"""create templates table

Revision ID: 3f9c2a7d1b04
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from template_store.core.config import get_settings


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b04"
down_revision = None
branch_labels = None
depends_on = None


def _schema() -> str | None:
    return get_settings().database.schema_name


def upgrade() -> None:
    schema = _schema()
    if schema:
        op.execute(sa.schema.CreateSchema(schema, if_not_exists=True))

    op.create_table(
        "templates",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column(
            "owner_type",
            sa.Enum("User", "Group", "Organization", name="owner_type", native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column("template_type", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500)),
        sa.Column("body", sa.LargeBinary(), nullable=False),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("deleted_at", sa.DateTime(timezone=True)),
        schema=schema,
    )
    op.create_index(
        "ix_templates_owner_type",
        "templates",
        ["owner_id", "owner_type", "template_type"],
        schema=schema,
    )
    op.create_index(
        "ix_templates_owner_usage",
        "templates",
        ["owner_id", sa.text("usage_count DESC")],
        schema=schema,
    )
    op.create_index(
        "uq_templates_owner_type_name",
        "templates",
        ["owner_id", "owner_type", "template_type", "name"],
        unique=True,
        schema=schema,
    )


def downgrade() -> None:
    schema = _schema()
    op.drop_index("uq_templates_owner_type_name", table_name="templates", schema=schema)
    op.drop_index("ix_templates_owner_usage", table_name="templates", schema=schema)
    op.drop_index("ix_templates_owner_type", table_name="templates", schema=schema)
    op.drop_table("templates", schema=schema)
