from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001_international_quotes"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "international_quotes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("origin_city", sa.String(length=128), nullable=False),
        sa.Column("origin_port", sa.String(length=128), nullable=False),
        sa.Column("destination_city", sa.String(length=128), nullable=False),
        sa.Column("destination_country", sa.String(length=128), nullable=False),
        sa.Column("destination_port", sa.String(length=128), nullable=False),
        sa.Column("mode", sa.String(length=32), nullable=False),
        sa.Column("volume_cbm", sa.String(length=32)),
        sa.Column("packing_charges", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("handling_charges", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("origin_charges_custom", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("ocean_freight", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("dthc", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("destination_charges", sa.Numeric(18, 4), nullable=False, server_default="0"),
        sa.Column("apply_vendor_gst", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_international_quotes_created_at", "international_quotes", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_international_quotes_created_at", table_name="international_quotes")
    op.drop_table("international_quotes")
