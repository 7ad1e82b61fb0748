"""Initial schema - role, role_permission, call_record.

Revision ID: 001
Revises:
Create Date: 2025-03-03

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_SEED_ROLES: dict[str, tuple[str, list[str]]] = {
    "admin": ("System administrator", ["*"]),
    "hr_manager": ("HR manager", ["hr.full_access", "hr.notifications"]),
    "supervisor": (
        "Department supervisor",
        ["hr.view", "programs.view", "programs.head", "callcentre.access"],
    ),
    "employee": ("Employee", ["hr.view", "programs.view"]),
    "me_officer": (
        "M&E officer",
        ["programs.me_access", "programs.create", "programs.edit", "programs.delete", "programs.indicators"],
    ),
    "programs_officer": (
        "Programs officer",
        ["programs.view", "programs.upload", "programs.documents", "programs.progress"],
    ),
    "callcentre_head": (
        "Call centre head",
        [
            "callcentre.access",
            "callcentre.officer",
            "callcentre.admin",
            "callcentre.reports",
            "callcentre.management",
        ],
    ),
    "callcentre_officer": (
        "Call centre officer",
        ["callcentre.access", "callcentre.officer", "callcentre.cases", "callcentre.data_entry"],
    ),
}


def upgrade() -> None:
    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_index("ix_role_name_upper", "role", [sa.text("upper(name)")], unique=True)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission", sa.String(100), primary_key=True),
    )

    op.create_table(
        "call_record",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("call_number", sa.String(32), nullable=False),
        sa.Column("case_number", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("caller_name", sa.String(255), nullable=True),
        sa.Column("caller_phone", sa.String(50), nullable=True),
        sa.Column("caller_email", sa.String(255), nullable=True),
        sa.Column("caller_age", sa.String(50), nullable=True),
        sa.Column("caller_gender", sa.String(50), nullable=True),
        sa.Column("caller_province", sa.String(100), nullable=True),
        sa.Column("caller_address", sa.Text(), nullable=True),
        sa.Column("client_name", sa.String(255), nullable=True),
        sa.Column("client_age", sa.String(50), nullable=True),
        sa.Column("client_sex", sa.String(50), nullable=True),
        sa.Column("client_province", sa.String(100), nullable=True),
        sa.Column("communication_mode", sa.String(20), nullable=False, server_default="phone"),
        sa.Column("call_type", sa.String(20), nullable=False, server_default="inbound"),
        sa.Column("purpose", sa.Text(), nullable=True),
        sa.Column("validity", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("assigned_officer", sa.String(255), nullable=True),
        sa.Column("follow_up_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.Column("resolution", sa.Text(), nullable=True),
        sa.Column("voucher_issued", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("voucher_value", sa.Numeric(12, 2), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=True),
    )
    op.create_index("ix_call_record_call_number", "call_record", ["call_number"], unique=True)
    op.create_index("ix_call_record_case_number", "call_record", ["case_number"], unique=True)
    op.create_index("ix_call_record_status", "call_record", ["status"])

    for name, (description, permissions) in _SEED_ROLES.items():
        op.execute(
            sa.text(
                "INSERT INTO role (id, name, description) VALUES (gen_random_uuid(), :name, :description)"
            ).bindparams(name=name, description=description)
        )
        op.execute(
            sa.text(
                "INSERT INTO role_permission (role_id, permission) "
                "SELECT id, unnest(CAST(:permissions AS text[])) FROM role WHERE name = :name"
            ).bindparams(name=name, permissions=permissions)
        )


def downgrade() -> None:
    op.drop_table("call_record")
    op.drop_table("role_permission")
    op.drop_table("role")
