from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'payment_statuses',
        sa.Column('status_id', sa.Integer, primary_key=True),
        sa.Column('description', sa.String(50), nullable=False)
    )
    op.create_table(
        'payments',
        sa.Column('payment_id', sa.Integer, primary_key=True, autoincrement=True),
        # Owned by the reservation service, no FK
        sa.Column('reservation_id', sa.Integer, nullable=False),
        sa.Column('amount', sa.Numeric(10,2), nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=False),
        sa.Column('status_id', sa.Integer, sa.ForeignKey('payment_statuses.status_id'), nullable=False),
        sa.Column('payment_date', sa.DateTime, nullable=False)
    )
    op.create_index('ix_payments_reservation_id', 'payments', ['reservation_id'])

def downgrade():
    op.drop_index('ix_payments_reservation_id', table_name='payments')
    op.drop_table('payments')
    op.drop_table('payment_statuses')
