"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates the exam results schema:
- certificate_types, sections, subjects: exam structure
- students, results: examinees and their grades
- objections: complaints filed against published results
- portal_settings: single row controlling result release
- admins: administrator accounts
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OBJECTION_STATUS = sa.Enum('new', 'reviewing', 'accepted', 'rejected', name='objectionstatus')


def upgrade() -> None:
    # 1. Exam structure
    op.create_table(
        'certificate_types',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('year', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'sections',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('certificate_type_id', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(['certificate_type_id'], ['certificate_types.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sections_name', 'sections', ['name'])
    op.create_index('ix_sections_certificate_type_id', 'sections', ['certificate_type_id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('section_id', sa.BigInteger(), nullable=False),
        sa.Column('max_grade', sa.DECIMAL(10, 2), nullable=False, server_default='100'),
        sa.Column('min_grade', sa.DECIMAL(10, 2), nullable=True),
        sa.ForeignKeyConstraint(['section_id'], ['sections.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subjects_section_id', 'subjects', ['section_id'])

    # 2. Students and grades
    op.create_table(
        'students',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('subscription_number', sa.String(length=20), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('section_id', sa.BigInteger(), nullable=False),
        sa.Column('certificate_type_id', sa.BigInteger(), nullable=True),
        sa.Column('manual_fail', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['section_id'], ['sections.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['certificate_type_id'], ['certificate_types.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_subscription_number', 'students', ['subscription_number'], unique=True)
    op.create_index('ix_students_section_id', 'students', ['section_id'])

    op.create_table(
        'results',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.BigInteger(), nullable=False),
        sa.Column('subject_id', sa.BigInteger(), nullable=False),
        sa.Column('grade', sa.DECIMAL(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_results_student_subject', 'results', ['student_id', 'subject_id'])

    # 3. Objections
    op.create_table(
        'objections',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('subscription_number', sa.String(length=20), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('section_id', sa.BigInteger(), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('objection_text', sa.Text(), nullable=False),
        sa.Column('status', OBJECTION_STATUS, nullable=False, server_default='new'),
        sa.Column('admin_note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['section_id'], ['sections.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_objections_subscription_number', 'objections', ['subscription_number'])
    op.create_index('ix_objections_status', 'objections', ['status'])

    # 4. Portal settings and admins
    op.create_table(
        'portal_settings',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('is_results_open', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('countdown_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('announcement_text', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'admins',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admins_username', 'admins', ['username'], unique=True)


def downgrade() -> None:
    op.drop_table('admins')
    op.drop_table('portal_settings')
    op.drop_table('objections')
    OBJECTION_STATUS.drop(op.get_bind(), checkfirst=True)
    op.drop_table('results')
    op.drop_table('students')
    op.drop_table('subjects')
    op.drop_table('sections')
    op.drop_table('certificate_types')
