from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="user"),
        sa.Column("role_preference", sa.String(length=16), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "contests",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("prize_money", sa.Numeric(12, 2), nullable=True),
        sa.Column("task_instruction", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=64), nullable=True),
        sa.Column("deadline", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("creator_email", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("participation_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("winner_submission_id", sa.Uuid(), nullable=True),
        sa.Column("winner_user_email", sa.String(length=255), nullable=True),
        sa.Column("winner_user_name", sa.String(length=255), nullable=True),
        sa.CheckConstraint("participation_count >= 0", name="ck_contests_participation_nonneg"),
    )
    op.create_index("ix_contests_type", "contests", ["type"])
    op.create_index("ix_contests_creator_email", "contests", ["creator_email"])
    op.create_index("ix_contests_status", "contests", ["status"])
    op.create_index("ix_contests_winner_user_email", "contests", ["winner_user_email"])

    op.create_table(
        "submissions",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("contest_id", sa.Uuid(), sa.ForeignKey("contests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("is_winner", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_submissions_contest_id", "submissions", ["contest_id"])
    op.create_index("ix_submissions_user_email", "submissions", ["user_email"])
    # at most one winner per contest
    op.create_index(
        "uq_submission_one_winner", "submissions", ["contest_id"],
        unique=True, postgresql_where=sa.text("is_winner"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("contest_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("transaction_id", sa.String(length=128), nullable=False, unique=True),
        sa.Column("payment_status", sa.String(length=16), nullable=False, server_default="paid"),
        sa.Column("paid_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_payments_user_email", "payments", ["user_email"])
    op.create_index("ix_payments_contest_id", "payments", ["contest_id"])

def downgrade() -> None:
    op.drop_index("ix_payments_contest_id", table_name="payments")
    op.drop_index("ix_payments_user_email", table_name="payments")
    op.drop_table("payments")
    op.drop_index("uq_submission_one_winner", table_name="submissions")
    op.drop_index("ix_submissions_user_email", table_name="submissions")
    op.drop_index("ix_submissions_contest_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_contests_winner_user_email", table_name="contests")
    op.drop_index("ix_contests_status", table_name="contests")
    op.drop_index("ix_contests_creator_email", table_name="contests")
    op.drop_index("ix_contests_type", table_name="contests")
    op.drop_table("contests")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
