"""Seed permissions, default roles, plans, features and limits.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SUBJECTS = ["Product", "Role", "User", "Plan", "Team"]
ACTIONS = ["create", "read", "update", "delete"]
SUPER_ADMIN_PERMISSION_ID = "22"

FEATURES = [
    ("1", "advanced-reports", "Advanced reports"),
    ("2", "api-access", "API access"),
    ("3", "custom-branding", "Custom branding"),
    ("4", "priority-support", "Priority support"),
]

LIMITS = [
    ("1", "max-projects", "Projects"),
    ("2", "storage-limit-mb", "Storage (MB)"),
    ("3", "max-api-calls", "API calls per month"),
    ("4", "max-team-members", "Team members"),
    ("5", "max-products", "Products"),
]

PLANS = [
    ("1", "Free", 0.0, "Grátis", "For getting started"),
    ("2", "Pro", 49.9, "/mês", "For growing teams"),
    ("3", "Enterprise", 199.9, "/mês", "For large organizations"),
]

PLAN_FEATURES = {
    "1": [],
    "2": ["1", "2"],
    "3": ["1", "2", "3", "4"],
}

# limit id -> value per plan; -1 is unlimited
PLAN_LIMITS = {
    "1": {"1": 3, "2": 500, "3": 1000, "4": 3, "5": 5},
    "2": {"1": 20, "2": 10000, "3": 100000, "4": 20, "5": 50},
    "3": {"1": -1, "2": -1, "3": -1, "4": -1, "5": -1},
}


def _permissions() -> list[dict]:
    rows = []
    for subject in SUBJECTS:
        for action in ACTIONS:
            rows.append({
                "id": str(len(rows) + 1),
                "action": action,
                "subject": subject,
                "name": f"{action.capitalize()} {subject}",
            })
    rows.append({"id": "21", "action": "read", "subject": "Permission", "name": "Read Permission"})
    rows.append({
        "id": SUPER_ADMIN_PERMISSION_ID,
        "action": "manage",
        "subject": "all",
        "name": "Manage everything",
    })
    return rows


def upgrade() -> None:
    permission = sa.table(
        "permission",
        sa.column("id", sa.String),
        sa.column("action", sa.String),
        sa.column("subject", sa.String),
        sa.column("name", sa.String),
    )
    role = sa.table(
        "role",
        sa.column("id", sa.String),
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
        sa.column("color", sa.String),
    )
    role_permission = sa.table(
        "role_permission",
        sa.column("role_id", sa.String),
        sa.column("permission_id", sa.String),
    )
    plan = sa.table(
        "plan",
        sa.column("id", sa.String),
        sa.column("name", sa.String),
        sa.column("price", sa.Float),
        sa.column("price_description", sa.String),
        sa.column("description", sa.Text),
    )
    feature = sa.table(
        "feature",
        sa.column("id", sa.String),
        sa.column("key", sa.String),
        sa.column("name", sa.String),
    )
    usage_limit = sa.table(
        "usage_limit",
        sa.column("id", sa.String),
        sa.column("key", sa.String),
        sa.column("name", sa.String),
    )
    plan_feature = sa.table(
        "plan_feature",
        sa.column("plan_id", sa.String),
        sa.column("feature_id", sa.String),
    )
    plan_limit = sa.table(
        "plan_limit",
        sa.column("plan_id", sa.String),
        sa.column("limit_id", sa.String),
        sa.column("value", sa.Integer),
    )

    permissions = _permissions()
    op.bulk_insert(permission, permissions)

    member_permission_ids = [
        p["id"] for p in permissions
        if p["subject"] == "Product" or (p["subject"] == "Plan" and p["action"] == "read")
    ]
    op.bulk_insert(role, [
        {"id": "1", "name": "Administrador", "description": "Full access", "color": "#dc2626"},
        {"id": "2", "name": "Membro", "description": "Manages team products", "color": "#6b7280"},
    ])
    op.bulk_insert(
        role_permission,
        [{"role_id": "1", "permission_id": SUPER_ADMIN_PERMISSION_ID}]
        + [{"role_id": "2", "permission_id": pid} for pid in member_permission_ids],
    )

    op.bulk_insert(plan, [
        {"id": i, "name": n, "price": p, "price_description": pd, "description": d}
        for i, n, p, pd, d in PLANS
    ])
    op.bulk_insert(feature, [{"id": i, "key": k, "name": n} for i, k, n in FEATURES])
    op.bulk_insert(usage_limit, [{"id": i, "key": k, "name": n} for i, k, n in LIMITS])
    op.bulk_insert(plan_feature, [
        {"plan_id": plan_id, "feature_id": fid}
        for plan_id, fids in PLAN_FEATURES.items()
        for fid in fids
    ])
    op.bulk_insert(plan_limit, [
        {"plan_id": plan_id, "limit_id": lid, "value": value}
        for plan_id, values in PLAN_LIMITS.items()
        for lid, value in values.items()
    ])


def downgrade() -> None:
    for table in (
        "plan_limit",
        "plan_feature",
        "usage_limit",
        "feature",
        "plan",
        "role_permission",
        "role",
        "permission",
    ):
        op.execute(f"DELETE FROM {table}")
