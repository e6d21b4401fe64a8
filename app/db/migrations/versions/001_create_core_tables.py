"""Create users, summer_houses and votes tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_session_id", "users", ["session_id"], unique=True)

    op.create_table(
        "summer_houses",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("booking_url", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_summer_houses_id", "summer_houses", ["id"])
    op.create_index("ix_summer_houses_name", "summer_houses", ["name"])

    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column(
            "summer_house_id",
            sa.Integer(),
            sa.ForeignKey("summer_houses.id"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        # Один голос пользователя за один дом
        sa.UniqueConstraint(
            "user_id", "summer_house_id", name="uq_votes_user_house"
        ),
    )
    op.create_index("ix_votes_id", "votes", ["id"])
    op.create_index("ix_votes_user_id", "votes", ["user_id"])
    op.create_index("ix_votes_summer_house_id", "votes", ["summer_house_id"])


def downgrade() -> None:
    op.drop_index("ix_votes_summer_house_id", table_name="votes")
    op.drop_index("ix_votes_user_id", table_name="votes")
    op.drop_index("ix_votes_id", table_name="votes")
    op.drop_table("votes")

    op.drop_index("ix_summer_houses_name", table_name="summer_houses")
    op.drop_index("ix_summer_houses_id", table_name="summer_houses")
    op.drop_table("summer_houses")

    op.drop_index("ix_users_session_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
