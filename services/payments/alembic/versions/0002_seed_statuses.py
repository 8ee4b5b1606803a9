"""seed_payment_statuses

Revision ID: 0002_seed_statuses
Revises: 0001_init
"""
from alembic import op
import sqlalchemy as sa

revision = '0002_seed_statuses'
down_revision = '0001_init'
branch_labels = None
depends_on = None

statuses = sa.table(
    'payment_statuses',
    sa.column('status_id', sa.Integer),
    sa.column('description', sa.String),
)

def upgrade() -> None:
    op.bulk_insert(statuses, [
        {'status_id': 1, 'description': 'PENDING'},
        {'status_id': 2, 'description': 'COMPLETED'},
        {'status_id': 3, 'description': 'FAILED'},
        {'status_id': 4, 'description': 'REFUNDED'},
    ])

def downgrade() -> None:
    op.execute(statuses.delete().where(statuses.c.status_id.in_([1, 2, 3, 4])))
