"""initial

Revision ID: 3f9c2a1b7e44
Revises:
Create Date: 2026-10-19 10:12:41.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f9c2a1b7e44"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create function to update updated_at timestamp
    op.execute(
        """
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = now();
            RETURN NEW;
        END;
        $$ language 'plpgsql';
    """
    )

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "email_verified",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")

    # Create animals table
    op.create_table(
        "animals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("number", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("age", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("number"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_animals_users"),
        sa.CheckConstraint("type IN ('cow', 'goat')", name="ck_animals_type"),
        sa.CheckConstraint(
            "status IN ('active', 'sold', 'dead', 'other')", name="ck_animals_status"
        ),
        sa.CheckConstraint("gender IN ('male', 'female')", name="ck_animals_gender"),
    )

    # Create indexes for animals table
    op.execute("CREATE INDEX IF NOT EXISTS idx_animals_number ON animals(number)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_animals_type ON animals(type)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_animals_status ON animals(status)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_animals_user_id ON animals(user_id)")
    op.execute(
        "CREATE INDEX IF NOT EXISTS idx_animals_created_at ON animals(created_at)"
    )

    # Create trigger for animals table
    op.execute("DROP TRIGGER IF EXISTS update_animals_updated_at ON animals")
    op.execute(
        """
        CREATE TRIGGER update_animals_updated_at
        BEFORE UPDATE ON animals
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_animals_updated_at ON animals")

    op.execute("DROP INDEX IF EXISTS idx_animals_created_at")
    op.execute("DROP INDEX IF EXISTS idx_animals_user_id")
    op.execute("DROP INDEX IF EXISTS idx_animals_status")
    op.execute("DROP INDEX IF EXISTS idx_animals_type")
    op.execute("DROP INDEX IF EXISTS idx_animals_number")
    op.execute("DROP INDEX IF EXISTS idx_users_email")

    op.drop_table("animals")
    op.drop_table("users")

    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")
