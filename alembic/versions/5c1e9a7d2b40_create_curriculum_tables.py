"""create_curriculum_tables

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.218305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('lecture_count', sa.Integer(), nullable=False),
        sa.Column('outline_requested_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_courses_id'), 'courses', ['id'], unique=False)

    op.create_table(
        'sections',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sections_id'), 'sections', ['id'], unique=False)
    op.create_index(op.f('ix_sections_course_id'), 'sections', ['course_id'], unique=False)

    op.create_table(
        'lectures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('section_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('video_url', sa.String(), nullable=True),
        sa.Column('is_free', sa.Boolean(), nullable=False),
        sa.Column('has_homework', sa.Boolean(), nullable=False),
        sa.Column('requires_homework_completion', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['section_id'], ['sections.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_lectures_id'), 'lectures', ['id'], unique=False)
    op.create_index(op.f('ix_lectures_section_id'), 'lectures', ['section_id'], unique=False)

    op.create_table(
        'lecture_progress',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('lecture_id', sa.Uuid(), nullable=False),
        sa.Column('last_position_seconds', sa.Float(), nullable=False),
        sa.Column('watch_percentage', sa.Integer(), nullable=False),
        sa.Column('watch_duration_seconds', sa.Integer(), nullable=False),
        sa.Column('total_duration_seconds', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('watch_count', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('last_sampled_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lecture_id'], ['lectures.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', 'lecture_id', name='uq_user_course_lecture'),
    )
    op.create_index(op.f('ix_lecture_progress_id'), 'lecture_progress', ['id'], unique=False)
    op.create_index(
        op.f('ix_lecture_progress_user_id'), 'lecture_progress', ['user_id'], unique=False
    )
    op.create_index(
        op.f('ix_lecture_progress_course_id'), 'lecture_progress', ['course_id'], unique=False
    )
    op.create_index(
        op.f('ix_lecture_progress_lecture_id'), 'lecture_progress', ['lecture_id'], unique=False
    )
    op.create_index(
        'ix_lecture_progress_user_course',
        'lecture_progress',
        ['user_id', 'course_id'],
        unique=False,
    )

    homework_status_enum = sa.Enum('submitted', 'approved', 'rejected', name='homeworkstatus')
    op.create_table(
        'homework_submissions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('lecture_id', sa.Uuid(), nullable=False),
        sa.Column('status', homework_status_enum, nullable=False),
        sa.Column('answer', sa.String(), nullable=True),
        sa.Column('file_url', sa.String(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lecture_id'], ['lectures.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_homework_submissions_id'), 'homework_submissions', ['id'], unique=False
    )
    op.create_index(
        'ix_homework_submissions_user_lecture',
        'homework_submissions',
        ['user_id', 'course_id', 'lecture_id'],
        unique=False,
    )

    op.create_table(
        'video_completion_settings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('completion_threshold', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            'completion_threshold >= 0 AND completion_threshold <= 100',
            name='ck_completion_threshold_range',
        ),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('video_completion_settings')
    op.drop_index('ix_homework_submissions_user_lecture', table_name='homework_submissions')
    op.drop_index(op.f('ix_homework_submissions_id'), table_name='homework_submissions')
    op.drop_table('homework_submissions')
    sa.Enum(name='homeworkstatus').drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_lecture_progress_user_course', table_name='lecture_progress')
    op.drop_index(op.f('ix_lecture_progress_lecture_id'), table_name='lecture_progress')
    op.drop_index(op.f('ix_lecture_progress_course_id'), table_name='lecture_progress')
    op.drop_index(op.f('ix_lecture_progress_user_id'), table_name='lecture_progress')
    op.drop_index(op.f('ix_lecture_progress_id'), table_name='lecture_progress')
    op.drop_table('lecture_progress')
    op.drop_index(op.f('ix_lectures_section_id'), table_name='lectures')
    op.drop_index(op.f('ix_lectures_id'), table_name='lectures')
    op.drop_table('lectures')
    op.drop_index(op.f('ix_sections_course_id'), table_name='sections')
    op.drop_index(op.f('ix_sections_id'), table_name='sections')
    op.drop_table('sections')
    op.drop_index(op.f('ix_courses_id'), table_name='courses')
    op.drop_table('courses')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
