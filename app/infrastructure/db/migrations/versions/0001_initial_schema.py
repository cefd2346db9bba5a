"""
Initial schema.
Creates every marketplace table, including the partial unique index that
allows a single open shift per chef.
"""

from alembic import op

from app.infrastructure.db.database import Base
from app.infrastructure.db import models  # noqa: F401

# Migration timestamp
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create all tables."""
    Base.metadata.create_all(bind=op.get_bind())


def downgrade():
    """Drop all tables."""
    Base.metadata.drop_all(bind=op.get_bind())
