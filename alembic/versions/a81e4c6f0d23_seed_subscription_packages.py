"""Seed subscription packages

Revision ID: a81e4c6f0d23
Revises: 3f1c0a9d2b7e
Create Date: 2025-09-30 11:20:47.902331

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a81e4c6f0d23'
down_revision: Union[str, None] = '3f1c0a9d2b7e'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO subscription_packages (code, name, description, price, duration_days, session_limit, gym_limit)
        VALUES
            ('basic_monthly', 'Basic Monthly', 'Access to one gym, up to 8 sessions per month', 29.99, 30, 8, '1'),
            ('premium_monthly', 'Premium Monthly', 'Access to all gyms, unlimited sessions', 59.99, 30, 999, 'unlimited'),
            ('annual', 'Annual', 'A year of access to all gyms', 499.0, 365, 999, 'unlimited')
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM subscription_packages WHERE code IN ('basic_monthly', 'premium_monthly', 'annual')
    """)
