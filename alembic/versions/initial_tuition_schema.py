"""initial_tuition_schema

Revision ID: initial_tuition_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates the tutor dashboard tables:
- users: local rows for identity-provider accounts
- tuitions / students: the teaching groups and their enrolment
- attendance: one presence flag per student, tuition and date
- class_logs: one log per tuition and date
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'initial_tuition_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


RECORD_STATUS_VALUES = ('ACTIVE', 'ARCHIVED')
USER_ROLE_VALUES = ('ADMIN', 'TUTOR', 'COACHING_CENTER')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    postgresql.ENUM(*RECORD_STATUS_VALUES, name='recordstatus').create(bind, checkfirst=True)
    postgresql.ENUM(*USER_ROLE_VALUES, name='userrole').create(bind, checkfirst=True)

    # Shared by tuitions and students; already created above
    record_status = postgresql.ENUM(*RECORD_STATUS_VALUES, name='recordstatus', create_type=False)
    user_role = postgresql.ENUM(*USER_ROLE_VALUES, name='userrole', create_type=False)

    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)

    op.create_table(
        'tuitions',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('tutor_id', sa.BigInteger(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('teaching_days', sa.JSON(), nullable=False),
        sa.Column('days_per_week', sa.Integer(), nullable=False),
        sa.Column('status', record_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tutor_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tuitions_tutor_id', 'tuitions', ['tutor_id'])
    op.create_index('ix_tuitions_status', 'tuitions', ['status'])

    op.create_table(
        'students',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('tuition_id', sa.BigInteger(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('parent_phone', sa.String(length=50), nullable=True),
        sa.Column('class_level', sa.String(length=50), nullable=False),
        sa.Column('fee_per_month', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', record_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tuition_id'], ['tuitions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_tuition_id', 'students', ['tuition_id'])
    op.create_index('ix_students_status', 'students', ['status'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.BigInteger(), nullable=False),
        sa.Column('tuition_id', sa.BigInteger(), nullable=False),
        sa.Column('attendance_date', sa.Date(), nullable=False),
        sa.Column('is_present', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tuition_id'], ['tuitions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'student_id', 'tuition_id', 'attendance_date',
            name='uq_attendance_student_tuition_date',
        ),
    )
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])
    op.create_index('ix_attendance_tuition_id', 'attendance', ['tuition_id'])
    op.create_index('ix_attendance_attendance_date', 'attendance', ['attendance_date'])

    op.create_table(
        'class_logs',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('tuition_id', sa.BigInteger(), nullable=False),
        sa.Column('class_date', sa.Date(), nullable=False),
        sa.Column('was_conducted', sa.Boolean(), nullable=False),
        sa.Column('topic_covered', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.BigInteger(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tuition_id'], ['tuitions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tuition_id', 'class_date', name='uq_class_log_tuition_date'),
    )
    op.create_index('ix_class_logs_tuition_id', 'class_logs', ['tuition_id'])
    op.create_index('ix_class_logs_class_date', 'class_logs', ['class_date'])


def downgrade() -> None:
    op.drop_table('class_logs')
    op.drop_table('attendance')
    op.drop_table('students')
    op.drop_table('tuitions')
    op.drop_table('users')
    op.execute('DROP TYPE IF EXISTS userrole')
    op.execute('DROP TYPE IF EXISTS recordstatus')
