"""ORM Models — SQLAlchemy declarative models for auth users, sessions, profiles and cards.

Invariants:
    - All models inherit from Base (db/base.py)
    - Column names are the wire contract; attribute names match them exactly

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.auth_user import AuthUserRow  # noqa: F401
from app.models.auth_session import AuthSessionRow  # noqa: F401
from app.models.profile import Profile  # noqa: F401
from app.models.card import Card  # noqa: F401
