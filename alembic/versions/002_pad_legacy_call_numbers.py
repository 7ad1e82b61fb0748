"""Pad legacy seven-digit call numbers to eight digits.

Call numbers imported from the previous system were written as
``0000042/2025``. Rewriting them once keeps every stored call number in the
current ``00000042/2025`` form.

Revision ID: 002
Revises: 001
Create Date: 2025-03-10

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        UPDATE call_record
        SET call_number = lpad(split_part(call_number, '/', 1), 8, '0')
            || '/' || split_part(call_number, '/', 2)
        WHERE call_number ~ '^[0-9]{1,7}/[0-9]{4}$'
    """)


def downgrade() -> None:
    # Original widths are not recorded.
    pass
