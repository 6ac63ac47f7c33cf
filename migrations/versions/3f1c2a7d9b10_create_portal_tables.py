from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a7d9b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.current_timestamp(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.current_timestamp(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('department', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('login_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.current_timestamp(), nullable=False),
    )

    op.create_table(
        'semesters',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('section', sa.String(length=50), nullable=False),
        sa.Column('has_midterm', sa.Boolean(), nullable=False),
        sa.Column('has_final', sa.Boolean(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('default_credits', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps()
    )
    op.create_index('ix_semesters_section', 'semesters', ['section'])

    op.create_table(
        'courses',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('semester_id', sa.String(length=36), sa.ForeignKey('semesters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('course_code', sa.String(length=50), nullable=True),
        sa.Column('teacher_name', sa.String(length=255), nullable=True),
        sa.Column('teacher_email', sa.String(length=255), nullable=True),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_highlighted', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps()
    )
    op.create_index('ix_courses_semester_id', 'courses', ['semester_id'])

    op.create_table(
        'topics',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('course_id', sa.String(length=36), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        *_timestamps()
    )
    op.create_index('ix_topics_course_id', 'topics', ['course_id'])

    op.create_table(
        'slides',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('topic_id', sa.String(length=36), sa.ForeignKey('topics.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('google_drive_url', sa.String(length=1024), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('file_size', sa.String(length=50), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        *_timestamps()
    )
    op.create_index('ix_slides_topic_id', 'slides', ['topic_id'])

    op.create_table(
        'videos',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('topic_id', sa.String(length=36), sa.ForeignKey('topics.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('youtube_url', sa.String(length=1024), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration', sa.String(length=20), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        *_timestamps()
    )
    op.create_index('ix_videos_topic_id', 'videos', ['topic_id'])

    op.create_table(
        'study_tools',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('course_id', sa.String(length=36), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('content_url', sa.String(length=1024), nullable=True),
        sa.Column('exam_type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps()
    )
    op.create_index('ix_study_tools_course_id', 'study_tools', ['course_id'])


def downgrade():
    op.drop_table('study_tools')
    op.drop_table('videos')
    op.drop_table('slides')
    op.drop_table('topics')
    op.drop_table('courses')
    op.drop_table('semesters')
    op.drop_table('admin_users')
