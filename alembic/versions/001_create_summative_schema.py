"""Create summative evaluation schema

Revision ID: 001
Revises:
Create Date: 2026-10-16 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Lab users table
    op.create_table('lab_users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('role', sa.Enum('superadmin', 'admin', 'lead_instructor', 'instructor', 'guest', name='lab_user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_index('ix_lab_users_email', 'lab_users', ['email'])
    op.create_index('ix_lab_users_is_active', 'lab_users', ['is_active'])

    # Cohorts table
    op.create_table('cohorts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cohort_number', sa.Integer(), nullable=False),
        sa.Column('program_abbreviation', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_cohorts_cohort_number', 'cohorts', ['cohort_number'])
    op.create_index('ix_cohorts_is_active', 'cohorts', ['is_active'])

    # Students table
    op.create_table('students',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('cohort_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['cohort_id'], ['cohorts.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_students_last_name', 'students', ['last_name'])
    op.create_index('ix_students_cohort_id', 'students', ['cohort_id'])

    # Summative scenarios table
    op.create_table('summative_scenarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('scenario_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('patient_presentation', sa.Text(), nullable=True),
        sa.Column('expected_interventions', sa.JSON(), nullable=False, comment='Interventions the examiner expects to see'),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_summative_scenarios_scenario_number', 'summative_scenarios', ['scenario_number'])
    op.create_index('ix_summative_scenarios_is_active', 'summative_scenarios', ['is_active'])
    # Only one active scenario per number
    op.create_index(
        'uq_summative_scenarios_active_number', 'summative_scenarios', ['scenario_number'],
        unique=True, postgresql_where=sa.text('is_active')
    )

    # Summative evaluations table
    op.create_table('summative_evaluations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('scenario_id', sa.Integer(), nullable=False),
        sa.Column('cohort_id', sa.Integer(), nullable=True),
        sa.Column('internship_id', sa.Integer(), nullable=True),
        sa.Column('evaluation_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('examiner_name', sa.String(length=200), nullable=False),
        sa.Column('examiner_email', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('status', sa.Enum('in_progress', 'completed', 'cancelled', name='summative_evaluation_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['scenario_id'], ['summative_scenarios.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['cohort_id'], ['cohorts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_summative_evaluations_scenario_id', 'summative_evaluations', ['scenario_id'])
    op.create_index('ix_summative_evaluations_cohort_id', 'summative_evaluations', ['cohort_id'])
    op.create_index('ix_summative_evaluations_internship_id', 'summative_evaluations', ['internship_id'])
    op.create_index('ix_summative_evaluations_evaluation_date', 'summative_evaluations', ['evaluation_date'])

    # Summative evaluation scores table
    op.create_table('summative_evaluation_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('evaluation_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('leadership_scene_score', sa.Integer(), nullable=True, comment='Leadership and Scene Management, 0-3'),
        sa.Column('patient_assessment_score', sa.Integer(), nullable=True, comment='Patient Assessment, 0-3'),
        sa.Column('patient_management_score', sa.Integer(), nullable=True, comment='Patient Management, 0-3'),
        sa.Column('interpersonal_score', sa.Integer(), nullable=True, comment='Interpersonal Relations, 0-3'),
        sa.Column('integration_score', sa.Integer(), nullable=True, comment='Field Impression and Transport Decision, 0-3'),
        sa.Column('total_score', sa.Integer(), nullable=False, default=0),
        sa.Column('critical_criteria_failed', sa.Boolean(), nullable=False, default=False),
        sa.Column('critical_fails_mandatory', sa.Boolean(), nullable=False, default=False),
        sa.Column('critical_harmful_intervention', sa.Boolean(), nullable=False, default=False),
        sa.Column('critical_unprofessional', sa.Boolean(), nullable=False, default=False),
        sa.Column('critical_criteria_notes', sa.String(length=2000), nullable=True),
        sa.Column('passed', sa.Boolean(), nullable=True, comment='Null until grading is complete'),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('examiner_notes', sa.String(length=4000), nullable=True),
        sa.Column('feedback_provided', sa.String(length=4000), nullable=True),
        sa.Column('grading_complete', sa.Boolean(), nullable=False, default=False),
        sa.Column('graded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('graded_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['evaluation_id'], ['summative_evaluations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['graded_by'], ['lab_users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('evaluation_id', 'student_id', name='uq_summative_evaluation_student')
    )

    op.create_index('ix_summative_evaluation_scores_evaluation_id', 'summative_evaluation_scores', ['evaluation_id'])
    op.create_index('ix_summative_evaluation_scores_student_id', 'summative_evaluation_scores', ['student_id'])
    op.create_index('ix_summative_evaluation_scores_grading_complete', 'summative_evaluation_scores', ['grading_complete'])


def downgrade():
    op.drop_table('summative_evaluation_scores')
    op.drop_table('summative_evaluations')
    op.drop_table('summative_scenarios')
    op.drop_table('students')
    op.drop_table('cohorts')
    op.drop_table('lab_users')

    op.execute('DROP TYPE IF EXISTS summative_evaluation_status')
    op.execute('DROP TYPE IF EXISTS lab_user_role')
