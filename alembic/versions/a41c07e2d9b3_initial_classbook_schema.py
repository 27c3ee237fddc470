"""initial classbook schema

Revision ID: a41c07e2d9b3
Revises:
Create Date: 2026-10-18 10:12:05.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a41c07e2d9b3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('admin', 'teacher', name='user_role'), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'grades',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_grades_id', 'grades', ['id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_subjects_id', 'subjects', ['id'])

    op.create_table(
        'classes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('grade_id', sa.Integer(), sa.ForeignKey('grades.id'), nullable=False),
        sa.Column('school_year', sa.String(), nullable=False),
        sa.Column('schedule', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])
    op.create_index('ix_classes_school_year', 'classes', ['school_year'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('computer_name', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('parent_phone', sa.String(), nullable=True),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=True),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_class_id', 'students', ['class_id'])

    op.create_table(
        'topics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('grade_id', sa.Integer(), sa.ForeignKey('grades.id'), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subjects.id'), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False),
    )
    op.create_index('ix_topics_id', 'topics', ['id'])
    op.create_index('ix_topics_grade_id', 'topics', ['grade_id'])
    op.create_index('ix_topics_subject_id', 'topics', ['subject_id'])

    op.create_table(
        'criteria',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('topic_id', sa.Integer(), sa.ForeignKey('topics.id'), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
    )
    op.create_index('ix_criteria_id', 'criteria', ['id'])
    op.create_index('ix_criteria_topic_id', 'criteria', ['topic_id'])

    op.create_table(
        'evaluations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('criterion_id', sa.Integer(), sa.ForeignKey('criteria.id'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('evaluated_date', sa.Date(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint(
            'student_id', 'criterion_id', 'class_id', 'evaluated_date', name='uq_evaluation_natural_key'
        ),
    )
    op.create_index('ix_evaluations_id', 'evaluations', ['id'])
    op.create_index('ix_evaluations_student_id', 'evaluations', ['student_id'])
    op.create_index('ix_evaluations_criterion_id', 'evaluations', ['criterion_id'])
    op.create_index('ix_evaluations_class_id', 'evaluations', ['class_id'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.UniqueConstraint('student_id', 'class_id', 'date', name='uq_attendance_natural_key'),
    )
    op.create_index('ix_attendance_id', 'attendance', ['id'])
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])
    op.create_index('ix_attendance_class_id', 'attendance', ['class_id'])

    op.create_table(
        'equipment_checks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('forgot_equipment', sa.Boolean(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.UniqueConstraint('student_id', 'class_id', 'date', name='uq_equipment_natural_key'),
    )
    op.create_index('ix_equipment_checks_id', 'equipment_checks', ['id'])
    op.create_index('ix_equipment_checks_student_id', 'equipment_checks', ['student_id'])
    op.create_index('ix_equipment_checks_class_id', 'equipment_checks', ['class_id'])

    op.create_table(
        'teacher_assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subjects.id'), nullable=False),
        sa.Column('school_year', sa.String(), nullable=False),
        sa.Column('is_homeroom', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_teacher_assignments_id', 'teacher_assignments', ['id'])
    op.create_index('ix_teacher_assignments_user_id', 'teacher_assignments', ['user_id'])


def downgrade() -> None:
    for table in (
        'teacher_assignments', 'equipment_checks', 'attendance', 'evaluations',
        'criteria', 'topics', 'students', 'classes', 'subjects', 'grades', 'users',
    ):
        op.drop_table(table)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
