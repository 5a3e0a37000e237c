"""Create log_entry table for calculator activity

Revision ID: 3f9c2a7b1d04
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7b1d04"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "log_entry",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("project", sa.String(length=50), nullable=True),
        sa.Column("calculator_category", sa.String(length=20), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_log_entry_project"), "log_entry", ["project"], unique=False)
    op.create_index(
        op.f("ix_log_entry_calculator_category"), "log_entry", ["calculator_category"], unique=False
    )


def downgrade():
    op.drop_index(op.f("ix_log_entry_calculator_category"), table_name="log_entry")
    op.drop_index(op.f("ix_log_entry_project"), table_name="log_entry")
    op.drop_table("log_entry")
