"""Initial schema - users, RBAC, plans and entitlements, teams, products.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ID = sa.String(64)


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", ID, primary_key=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("subject", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.UniqueConstraint("action", "subject", name="uq_permission_action_subject"),
    )

    op.create_table(
        "role",
        sa.Column("id", ID, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(16), nullable=False, server_default="#6b7280"),
    )
    op.create_index("ix_role_name_lower", "role", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "role_permission",
        sa.Column("role_id", ID, sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "permission_id",
            ID,
            sa.ForeignKey("permission.id", ondelete="RESTRICT"),
            primary_key=True,
        ),
    )

    op.create_table(
        "plan",
        sa.Column("id", ID, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("price_description", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_plan_price_non_negative"),
    )

    op.create_table(
        "feature",
        sa.Column("id", ID, primary_key=True),
        sa.Column("key", sa.String(100), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "usage_limit",
        sa.Column("id", ID, primary_key=True),
        sa.Column("key", sa.String(100), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "plan_feature",
        sa.Column("plan_id", ID, sa.ForeignKey("plan.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "feature_id", ID, sa.ForeignKey("feature.id", ondelete="CASCADE"), primary_key=True
        ),
    )

    # value -1 means unlimited
    op.create_table(
        "plan_limit",
        sa.Column("plan_id", ID, sa.ForeignKey("plan.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "limit_id", ID, sa.ForeignKey("usage_limit.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.CheckConstraint("value >= -1", name="ck_plan_limit_value"),
    )

    op.create_table(
        "app_user",
        sa.Column("id", ID, primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role_id", ID, sa.ForeignKey("role.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("plan_id", ID, sa.ForeignKey("plan.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("credential_ref", sa.String(255), nullable=True),
    )
    op.create_index("ix_app_user_email_lower", "app_user", [sa.text("lower(email)")], unique=True)
    op.create_index("ix_app_user_role_id", "app_user", ["role_id"])
    op.create_index("ix_app_user_plan_id", "app_user", ["plan_id"])

    op.create_table(
        "team",
        sa.Column("id", ID, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", ID, sa.ForeignKey("app_user.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "team_member",
        sa.Column("team_id", ID, sa.ForeignKey("team.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "user_id", ID, sa.ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('OWNER', 'ADMIN', 'MEMBER')", name="ck_team_member_role"),
    )
    op.create_index("ix_team_member_user_id", "team_member", ["user_id"])
    # one OWNER per team
    op.create_index(
        "ux_team_member_owner",
        "team_member",
        ["team_id"],
        unique=True,
        postgresql_where=sa.text("role = 'OWNER'"),
    )

    op.create_table(
        "team_invitation",
        sa.Column("id", ID, primary_key=True),
        sa.Column("team_id", ID, sa.ForeignKey("team.id", ondelete="CASCADE"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("invited_by", ID, sa.ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True),
        sa.CheckConstraint("role IN ('ADMIN', 'MEMBER')", name="ck_team_invitation_role"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'DECLINED')", name="ck_team_invitation_status"
        ),
    )
    op.create_index("ix_team_invitation_team_id", "team_invitation", ["team_id"])
    op.create_index(
        "ux_team_invitation_pending",
        "team_invitation",
        ["team_id", sa.text("lower(email)")],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
    )

    op.create_table(
        "product",
        sa.Column("id", ID, primary_key=True),
        sa.Column("team_id", ID, sa.ForeignKey("team.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", ID, sa.ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True),
        sa.CheckConstraint("status IN ('ACTIVE', 'INACTIVE')", name="ck_product_status"),
    )
    op.create_index("ix_product_team_id", "product", ["team_id"])


def downgrade() -> None:
    op.drop_table("product")
    op.drop_table("team_invitation")
    op.drop_table("team_member")
    op.drop_table("team")
    op.drop_table("app_user")
    op.drop_table("plan_limit")
    op.drop_table("plan_feature")
    op.drop_table("usage_limit")
    op.drop_table("feature")
    op.drop_table("plan")
    op.drop_table("role_permission")
    op.drop_table("role")
    op.drop_table("permission")
