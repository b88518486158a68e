"""create user table

Revision ID: 001_create_user_table
Revises:
Create Date: 2024-03-19 20:22:45.722000

"""

from alembic import op
from sqlalchemy import Column, DateTime, Integer, String

# revision identifiers, used by Alembic.
revision = "001_create_user_table"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("updated_at", DateTime(timezone=True), nullable=False),
        Column("deleted_at", DateTime(timezone=True), nullable=True),
        Column("email", String(255), nullable=False),
        Column("password", String(255), nullable=False),
        Column("name", String(255), nullable=False),
    )


def downgrade():
    op.drop_table("user")
