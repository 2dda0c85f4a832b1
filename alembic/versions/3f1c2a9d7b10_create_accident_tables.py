"""create accident tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 10:12:44.512093

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    accident_types = op.create_table(
        "accident_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type_name", sa.String(), nullable=False, unique=True),
    )
    accident_rules = op.create_table(
        "accident_rules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "accidents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column(
            "type_id",
            sa.Integer(),
            sa.ForeignKey("accident_types.id"),
            nullable=False,
        ),
    )
    op.create_index("ix_accidents_type_id", "accidents", ["type_id"])
    op.create_table(
        "accidents_rules",
        sa.Column(
            "accident_id",
            sa.Integer(),
            sa.ForeignKey("accidents.id"),
            primary_key=True,
        ),
        sa.Column(
            "rule_id",
            sa.Integer(),
            sa.ForeignKey("accident_rules.id"),
            primary_key=True,
        ),
    )

    op.bulk_insert(
        accident_types,
        [
            {"id": 1, "type_name": "Two cars"},
            {"id": 2, "type_name": "Car and pedestrian"},
            {"id": 3, "type_name": "Car and bicycle"},
        ],
    )
    op.bulk_insert(
        accident_rules,
        [
            {"id": 1, "name": "Article 1"},
            {"id": 2, "name": "Article 2"},
            {"id": 3, "name": "Article 3"},
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("accidents_rules")
    op.drop_index("ix_accidents_type_id", table_name="accidents")
    op.drop_table("accidents")
    op.drop_table("accident_rules")
    op.drop_table("accident_types")
