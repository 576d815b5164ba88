"""create invoice_sequences table

Revision ID: b7d9e1f3a5c7
Revises: a1c2e3f4a5b6
Create Date: 2026-10-12 14:30:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "b7d9e1f3a5c7"
down_revision = "a1c2e3f4a5b6"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "invoice_sequences",
        sa.Column("period", sa.String(length=7), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("period"),
    )

    # Seed counters from invoices issued before the table existed
    op.execute(
        """
        INSERT INTO invoice_sequences (period, last_value)
        SELECT substr(invoice_number, 5, 7),
               MAX(CAST(substr(invoice_number, 13) AS INTEGER))
        FROM invoices
        WHERE invoice_number LIKE 'INV-____-__-%'
        GROUP BY substr(invoice_number, 5, 7)
        """
    )


def downgrade() -> None:
    op.drop_table("invoice_sequences")
