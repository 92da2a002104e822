"""initial schema

Revision ID: 5c2f8e1a9b04
Revises:
Create Date: 2026-10-19 09:12:40.512388

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c2f8e1a9b04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
    ]


def base_indexes(table: str):
    op.create_index(f'ix_{table}_id', table, ['id'])
    op.create_index(f'ix_{table}_created_at', table, ['created_at'])
    op.create_index(f'ix_{table}_is_deleted', table, ['is_deleted'])


def upgrade() -> None:
    op.create_table(
        'departments',
        *base_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('code', sa.String(20), nullable=False),
        sa.Column('description', sa.String(500)),
        sa.Column('head_of_department_id', sa.Uuid()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('code'),
    )
    base_indexes('departments')
    op.create_index('ix_departments_head_of_department_id', 'departments', ['head_of_department_id'])

    op.create_table(
        'staff',
        *base_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('gender', sa.String(10)),
        sa.Column('qualification', sa.String(500)),
        sa.Column('joining_date', sa.Date()),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('department_id', sa.Uuid(), sa.ForeignKey('departments.id')),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('assigned_subjects', sa.JSON()),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('staff')
    op.create_index('ix_staff_email', 'staff', ['email'], unique=True)
    op.create_index('ix_staff_role', 'staff', ['role'])
    op.create_index('ix_staff_department_id', 'staff', ['department_id'])

    op.create_table(
        'students',
        *base_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('date_of_birth', sa.Date()),
        sa.Column('gender', sa.String(10)),
        sa.Column('address', sa.String(500)),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('roll_number', sa.String(20), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('parent_name', sa.String(100)),
        sa.Column('parent_phone', sa.String(20)),
        sa.Column('parent_email', sa.String(100)),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('class_name', 'section', 'roll_number', 'academic_year', name='uq_student_roll'),
    )
    base_indexes('students')
    op.create_index('ix_students_email', 'students', ['email'], unique=True)
    op.create_index('ix_students_roll_number', 'students', ['roll_number'])
    op.create_index('ix_students_class_name', 'students', ['class_name'])
    op.create_index('ix_students_section', 'students', ['section'])

    op.create_table(
        'classes',
        *base_columns(),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('capacity', sa.Integer()),
        sa.Column('classroom', sa.String(50)),
        sa.Column('coordinator_id', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.Column('is_active', sa.Boolean()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('class_name', 'section', 'academic_year', name='uq_class_identity'),
    )
    base_indexes('classes')
    op.create_index('ix_classes_class_name', 'classes', ['class_name'])
    op.create_index('ix_classes_coordinator_id', 'classes', ['coordinator_id'])

    op.create_table(
        'attendance',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(10), nullable=False),
        sa.Column('late_arrival', sa.Boolean(), nullable=False),
        sa.Column('early_departure', sa.Boolean(), nullable=False),
        sa.Column('remarks', sa.String(500)),
        sa.Column('marked_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('attendance')
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])
    op.create_index('ix_attendance_date', 'attendance', ['date'])
    op.create_index('idx_attendance_class_date', 'attendance', ['class_name', 'section', 'date'])
    op.create_index('idx_attendance_student_date', 'attendance', ['student_id', 'date'])

    op.create_table(
        'assignments',
        *base_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.Column('max_score', sa.Integer(), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('assignments')
    op.create_index('ix_assignments_class_name', 'assignments', ['class_name'])
    op.create_index('ix_assignments_section', 'assignments', ['section'])
    op.create_index('ix_assignments_due_date', 'assignments', ['due_date'])
    op.create_index('ix_assignments_created_by', 'assignments', ['created_by'])

    op.create_table(
        'assignment_submissions',
        *base_columns(),
        sa.Column('assignment_id', sa.Uuid(), sa.ForeignKey('assignments.id'), nullable=False),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('content', sa.Text()),
        sa.Column('attachment_url', sa.String(500)),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('score', sa.Float()),
        sa.Column('feedback', sa.Text()),
        sa.Column('graded_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.Column('graded_at', sa.DateTime()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('assignment_id', 'student_id', name='uq_submission_student'),
    )
    base_indexes('assignment_submissions')
    op.create_index('ix_assignment_submissions_assignment_id', 'assignment_submissions', ['assignment_id'])
    op.create_index('ix_assignment_submissions_student_id', 'assignment_submissions', ['student_id'])

    op.create_table(
        'exams',
        *base_columns(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('exam_type', sa.String(50), nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('exam_date', sa.Date(), nullable=False),
        sa.Column('total_marks', sa.Integer(), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('instructions', sa.Text()),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('exams')
    op.create_index('ix_exams_class_name', 'exams', ['class_name'])
    op.create_index('ix_exams_section', 'exams', ['section'])
    op.create_index('ix_exams_academic_year', 'exams', ['academic_year'])
    op.create_index('ix_exams_created_by', 'exams', ['created_by'])

    op.create_table(
        'exam_results',
        *base_columns(),
        sa.Column('exam_id', sa.Uuid(), sa.ForeignKey('exams.id'), nullable=False),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('marks', sa.Float(), nullable=False),
        sa.Column('total_marks', sa.Integer(), nullable=False),
        sa.Column('grade', sa.String(3)),
        sa.Column('rank', sa.Integer()),
        sa.Column('total_students', sa.Integer()),
        sa.Column('remarks', sa.Text()),
        sa.Column('entered_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('exam_id', 'student_id', name='uq_exam_result_student'),
    )
    base_indexes('exam_results')
    op.create_index('ix_exam_results_exam_id', 'exam_results', ['exam_id'])
    op.create_index('ix_exam_results_student_id', 'exam_results', ['student_id'])
    op.create_index('ix_exam_results_academic_year', 'exam_results', ['academic_year'])

    op.create_table(
        'fee_structures',
        *base_columns(),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('term', sa.String(30), nullable=False),
        sa.Column('components', sa.JSON()),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('due_date', sa.Date()),
        sa.Column('late_payment_fee', sa.Numeric(8, 2)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('fee_structures')
    op.create_index('ix_fee_structures_academic_year', 'fee_structures', ['academic_year'])
    op.create_index('ix_fee_structures_class_name', 'fee_structures', ['class_name'])

    op.create_table(
        'fee_payments',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('fee_structure_id', sa.Uuid(), sa.ForeignKey('fee_structures.id')),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('term', sa.String(30)),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(10), nullable=False),
        sa.Column('payment_date', sa.DateTime()),
        sa.Column('due_date', sa.Date()),
        sa.Column('payment_method', sa.String(20)),
        sa.Column('receipt_number', sa.String(40)),
        sa.Column('remarks', sa.String(500)),
        sa.Column('collected_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('receipt_number'),
    )
    base_indexes('fee_payments')
    op.create_index('ix_fee_payments_student_id', 'fee_payments', ['student_id'])
    op.create_index('ix_fee_payments_fee_structure_id', 'fee_payments', ['fee_structure_id'])
    op.create_index('ix_fee_payments_academic_year', 'fee_payments', ['academic_year'])

    op.create_table(
        'announcements',
        *base_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('audience', sa.JSON()),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('published_at', sa.DateTime()),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('announcements')
    op.create_index('ix_announcements_status', 'announcements', ['status'])

    op.create_table(
        'events',
        *base_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('location', sa.String(200), nullable=False),
        sa.Column('organizer', sa.String(200)),
        sa.Column('event_type', sa.String(20), nullable=False),
        sa.Column('target_audience', sa.JSON()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('events')

    op.create_table(
        'approval_requests',
        *base_columns(),
        sa.Column('requester_id', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.Column('request_type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('request_data', sa.JSON()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('current_approver', sa.String(20), nullable=False),
        sa.Column('approval_history', sa.JSON()),
        sa.Column('created_item_id', sa.Uuid()),
        sa.Column('created_item_type', sa.String(30)),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('approval_requests')
    op.create_index('ix_approval_requests_requester_id', 'approval_requests', ['requester_id'])
    op.create_index('ix_approval_requests_request_type', 'approval_requests', ['request_type'])
    op.create_index('idx_approval_queue', 'approval_requests', ['current_approver', 'status'])

    op.create_table(
        'disciplinary_records',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('incident_type', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('severity', sa.String(10), nullable=False),
        sa.Column('action_taken', sa.Text()),
        sa.Column('status', sa.String(10), nullable=False),
        sa.Column('reported_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('disciplinary_records')
    op.create_index('ix_disciplinary_records_student_id', 'disciplinary_records', ['student_id'])

    op.create_table(
        'health_records',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('height', sa.Float()),
        sa.Column('weight', sa.Float()),
        sa.Column('blood_group', sa.String(5)),
        sa.Column('allergies', sa.JSON()),
        sa.Column('medical_conditions', sa.JSON()),
        sa.Column('last_checkup', sa.Date()),
        sa.Column('health_incidents', sa.JSON()),
        sa.Column('updated_by', sa.Uuid(), sa.ForeignKey('staff.id')),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('health_records')
    op.create_index('ix_health_records_student_id', 'health_records', ['student_id'], unique=True)

    op.create_table(
        'comprehensive_progress_reports',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('report_period', sa.String(20), nullable=False),
        sa.Column('report_date', sa.DateTime(), nullable=False),
        sa.Column('generated_by', sa.Uuid(), sa.ForeignKey('staff.id'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('attendance', sa.JSON(), nullable=False),
        sa.Column('assignment_performance', sa.JSON(), nullable=False),
        sa.Column('exam_performance', sa.JSON(), nullable=False),
        sa.Column('behavior', sa.JSON(), nullable=False),
        sa.Column('fee_status', sa.JSON(), nullable=False),
        sa.Column('health_info', sa.JSON(), nullable=False),
        sa.Column('trends', sa.JSON(), nullable=False),
        sa.Column('recommendations', sa.JSON(), nullable=False),
        sa.Column('data_sources', sa.JSON()),
        sa.Column('teacher_remarks', sa.String(1000)),
        sa.Column('feedback', sa.JSON()),
        sa.PrimaryKeyConstraint('id'),
    )
    base_indexes('comprehensive_progress_reports')
    op.create_index('ix_comprehensive_progress_reports_student_id', 'comprehensive_progress_reports', ['student_id'])
    op.create_index('idx_report_student_year', 'comprehensive_progress_reports', ['student_id', 'academic_year', 'report_period'])


def downgrade() -> None:
    for table in (
        'comprehensive_progress_reports',
        'health_records',
        'disciplinary_records',
        'approval_requests',
        'events',
        'announcements',
        'fee_payments',
        'fee_structures',
        'exam_results',
        'exams',
        'assignment_submissions',
        'assignments',
        'attendance',
        'classes',
        'students',
        'staff',
        'departments',
    ):
        op.drop_table(table)
