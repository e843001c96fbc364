"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate and ``init_db`` rely on ``SQLModel.metadata``, which is
  populated only when the table models are imported.
- ``alembic/env.py`` and ``accounts.db.engine`` import ``accounts.models``, so
  this module must import all SQLModel ``table=True`` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from accounts.user.models import User, UserProfile  # noqa: F401
