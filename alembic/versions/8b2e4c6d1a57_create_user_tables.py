"""create user tables

Revision ID: 8b2e4c6d1a57
Revises: 3f1c2a9d7b10
Create Date: 2026-10-19 16:40:03.118402

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8b2e4c6d1a57"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("username", sa.String(), primary_key=True),
        sa.Column("password", sa.String(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "authorities",
        sa.Column(
            "username",
            sa.String(),
            sa.ForeignKey("users.username"),
            primary_key=True,
        ),
        sa.Column("authority", sa.String(), primary_key=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("authorities")
    op.drop_table("users")
