"""create account tables

Revision ID: 4b7e21c9d0a3
Revises:
Create Date: 2026-10-19 09:12:40.118202

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b7e21c9d0a3"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("lower_name", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hide_email", sa.Boolean(), nullable=False),
        sa.Column("passwd", sa.String(length=255), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("website", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("rands", sa.String(length=10), nullable=False),
        sa.Column("salt", sa.String(length=10), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("allow_git_hook", sa.Boolean(), nullable=False),
        sa.Column("avatar", sa.String(length=2048), nullable=False),
        sa.Column("avatar_email", sa.String(length=255), nullable=False),
        sa.Column("use_custom_avatar", sa.Boolean(), nullable=False),
        sa.Column("num_followers", sa.Integer(), nullable=False),
        sa.Column("num_followings", sa.Integer(), nullable=False),
        sa.Column("num_stars", sa.Integer(), nullable=False),
        sa.Column("num_repos", sa.Integer(), nullable=False),
        sa.Column("num_teams", sa.Integer(), nullable=False),
        sa.Column("num_members", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("email", "type", name="uq_users_email_type"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_lower_name"), "users", ["lower_name"], unique=True)

    op.create_table(
        "email_addresses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("uid", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("is_activated", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["uid"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_email_addresses_id"), "email_addresses", ["id"], unique=False)
    op.create_index(op.f("ix_email_addresses_uid"), "email_addresses", ["uid"], unique=False)

    op.create_table(
        "follows",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("follow_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["follow_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "follow_id", name="uq_follows_pair"),
    )
    op.create_index(op.f("ix_follows_id"), "follows", ["id"], unique=False)
    op.create_index(op.f("ix_follows_user_id"), "follows", ["user_id"], unique=False)
    op.create_index(op.f("ix_follows_follow_id"), "follows", ["follow_id"], unique=False)

    op.create_table(
        "repositories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("lower_name", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "lower_name", name="uq_repositories_owner_name"),
    )
    op.create_index(op.f("ix_repositories_id"), "repositories", ["id"], unique=False)
    op.create_index(op.f("ix_repositories_owner_id"), "repositories", ["owner_id"], unique=False)

    for table in ("watches", "accesses"):
        columns = [
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("repo_id", sa.Integer(), nullable=False),
        ]
        if table == "accesses":
            columns.append(sa.Column("mode", sa.Integer(), nullable=False))
        op.create_table(
            table,
            *columns,
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["repo_id"], ["repositories.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "repo_id", name=f"uq_{table}_pair"),
        )
        op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)
        op.create_index(op.f(f"ix_{table}_user_id"), table, ["user_id"], unique=False)
        op.create_index(op.f(f"ix_{table}_repo_id"), table, ["repo_id"], unique=False)

    op.create_table(
        "org_users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("uid", sa.Integer(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("is_owner", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["uid"], ["users.id"]),
        sa.ForeignKeyConstraint(["org_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uid", "org_id", name="uq_org_users_pair"),
    )
    op.create_index(op.f("ix_org_users_id"), "org_users", ["id"], unique=False)
    op.create_index(op.f("ix_org_users_uid"), "org_users", ["uid"], unique=False)
    op.create_index(op.f("ix_org_users_org_id"), "org_users", ["org_id"], unique=False)

    op.create_table(
        "actions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("op_type", sa.Integer(), nullable=False),
        sa.Column("act_user_name", sa.String(length=255), nullable=False),
        sa.Column("repo_name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_actions_id"), "actions", ["id"], unique=False)
    op.create_index(op.f("ix_actions_user_id"), "actions", ["user_id"], unique=False)

    op.create_table(
        "oauth2",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("uid", sa.Integer(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("identity", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["uid"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("type", "identity", name="uq_oauth2_type_identity"),
    )
    op.create_index(op.f("ix_oauth2_id"), "oauth2", ["id"], unique=False)
    op.create_index(op.f("ix_oauth2_uid"), "oauth2", ["uid"], unique=False)

    op.create_table(
        "public_keys",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("fingerprint", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_public_keys_id"), "public_keys", ["id"], unique=False)
    op.create_index(op.f("ix_public_keys_owner_id"), "public_keys", ["owner_id"], unique=False)
    op.create_index(
        op.f("ix_public_keys_fingerprint"), "public_keys", ["fingerprint"], unique=False
    )


def downgrade() -> None:
    # Dependents first, users last
    for table in (
        "public_keys",
        "oauth2",
        "actions",
        "org_users",
        "accesses",
        "watches",
        "repositories",
        "follows",
        "email_addresses",
        "users",
    ):
        op.drop_table(table)
