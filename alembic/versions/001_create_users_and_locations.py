"""create locations, addresses, roles and users; seed roles and first admin

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import uuid
from datetime import datetime
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from passlib.context import CryptContext

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def upgrade() -> None:
    op.create_table(
        "provinces",
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("code"),
    )
    op.create_table(
        "districts",
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("province_code", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("code"),
        sa.ForeignKeyConstraint(["province_code"], ["provinces.code"]),
    )
    op.create_table(
        "wards",
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("district_code", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("code"),
        sa.ForeignKeyConstraint(["district_code"], ["districts.code"]),
    )
    op.create_table(
        "addresses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("address_detail", sa.String(500), nullable=True),
        sa.Column("ward_code", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["ward_code"], ["wards.code"]),
    )
    op.create_table(
        "roles",
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("name"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("fullname", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.Column("address_id", sa.String(36), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["address_id"], ["addresses.id"]),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("role_name", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role_name"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_name"], ["roles.name"], ondelete="CASCADE"),
    )

    op.execute(
        sa.text(
            "INSERT INTO roles (name, description) VALUES "
            "('USER', 'Buyer and shop owner'), ('ADMIN', 'Administrator')"
        )
    )

    # Get settings from environment (will be loaded by Alembic env.py)
    from marketplace.core.config import settings

    admin_id = str(uuid.uuid4())
    op.execute(
        sa.text(
            """
            INSERT INTO users (id, username, password_hash, created_date)
            VALUES (:id, :username, :password_hash, :created_date)
            """
        ).bindparams(
            id=admin_id,
            username=settings.first_admin_username,
            password_hash=pwd_context.hash(settings.first_admin_password),
            created_date=datetime.now(),
        )
    )
    op.execute(
        sa.text(
            "INSERT INTO user_roles (user_id, role_name) VALUES (:user_id, 'ADMIN')"
        ).bindparams(user_id=admin_id)
    )


def downgrade() -> None:
    op.drop_table("user_roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    op.drop_table("roles")
    op.drop_table("addresses")
    op.drop_table("wards")
    op.drop_table("districts")
    op.drop_table("provinces")
