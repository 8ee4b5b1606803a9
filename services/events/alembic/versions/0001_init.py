from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'events',
        sa.Column('event_id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('start_date', sa.DateTime, nullable=False),
        sa.Column('end_date', sa.DateTime, nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('organizer_id', sa.Integer, nullable=True),
        sa.Column('category_id', sa.Integer, nullable=True),
        sa.Column('url', sa.String(500), nullable=True)
    )
    op.create_index('ix_events_organizer_id', 'events', ['organizer_id'])
    op.create_index('ix_events_category_id', 'events', ['category_id'])

def downgrade():
    op.drop_index('ix_events_category_id', table_name='events')
    op.drop_index('ix_events_organizer_id', table_name='events')
    op.drop_table('events')
