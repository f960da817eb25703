"""ORM Models — SQLAlchemy declarative models for users and goals.

Invariants:
    - All models inherit from Base (db/base.py)
    - Goals reference users by user_id only; the user never owns a goal collection

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from accountability.models.user import User  # noqa: F401
from accountability.models.goal import Goal  # noqa: F401
