"""Initial schema: identity, mentors, availability, sessions

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*names: str) -> list[sa.Column]:
    return [
        sa.Column(name, sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True)
        for name in names
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps("created_at"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.String(length=1024), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("user_type", sa.String(length=20), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.ForeignKeyConstraint(["id"], ["users.id"], name="profiles_id_fkey", ondelete="CASCADE"),
    )

    op.create_table(
        "mentors",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("years_experience", sa.Integer(), nullable=True),
        sa.Column("industry", sa.String(length=255), nullable=True),
        sa.Column("expertise", sa.JSON(), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("job_title", sa.String(length=255), nullable=True),
        sa.Column("average_rating", sa.Numeric(3, 2), nullable=True),
        sa.Column("review_count", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["id"], ["profiles.id"], name="mentors_id_fkey", ondelete="CASCADE"),
    )

    op.create_table(
        "mentor_availability",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("mentor_id", sa.Uuid(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_booked", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps("created_at"),
        sa.ForeignKeyConstraint(
            ["mentor_id"],
            ["mentors.id"],
            name="mentor_availability_mentor_id_fkey",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "idx_mentor_availability_mentor_day", "mentor_availability", ["mentor_id", "day"]
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("mentor_id", sa.Uuid(), nullable=False),
        sa.Column("mentee_id", sa.Uuid(), nullable=False),
        sa.Column("availability_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date_time", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("payment_status", sa.String(length=20), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"], name="sessions_mentor_id_fkey"),
        sa.ForeignKeyConstraint(["mentee_id"], ["profiles.id"], name="sessions_mentee_id_fkey"),
        sa.ForeignKeyConstraint(
            ["availability_id"],
            ["mentor_availability.id"],
            name="sessions_availability_id_fkey",
            ondelete="SET NULL",
        ),
    )
    op.create_index("idx_sessions_mentor_date", "sessions", ["mentor_id", "date_time"])
    op.create_index("idx_sessions_mentee_date", "sessions", ["mentee_id", "date_time"])

    op.create_table(
        "group_sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("mentor_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("date_time", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("enrolled", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"], name="group_sessions_mentor_id_fkey"),
    )

    op.create_table(
        "group_enrollments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("group_session_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("payment_status", sa.String(length=20), nullable=False),
        *_timestamps("created_at"),
        sa.ForeignKeyConstraint(
            ["group_session_id"],
            ["group_sessions.id"],
            name="group_enrollments_group_session_id_fkey",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], name="group_enrollments_user_id_fkey"),
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("mentor_id", sa.Uuid(), nullable=False),
        sa.Column("reviewer_id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=True),
        sa.Column("group_session_id", sa.Uuid(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps("created_at"),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"], name="reviews_mentor_id_fkey"),
        sa.ForeignKeyConstraint(["reviewer_id"], ["profiles.id"], name="reviews_reviewer_id_fkey"),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], name="reviews_session_id_fkey"),
        sa.ForeignKeyConstraint(
            ["group_session_id"], ["group_sessions.id"], name="reviews_group_session_id_fkey"
        ),
    )


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("group_enrollments")
    op.drop_table("group_sessions")
    op.drop_index("idx_sessions_mentee_date", table_name="sessions")
    op.drop_index("idx_sessions_mentor_date", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("idx_mentor_availability_mentor_day", table_name="mentor_availability")
    op.drop_table("mentor_availability")
    op.drop_table("mentors")
    op.drop_table("profiles")
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
