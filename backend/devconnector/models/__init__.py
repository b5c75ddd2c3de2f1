"""ORM Models — SQLAlchemy declarative models for users, profiles and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - Profiles and posts reference users by id; likes, comments, experience and
      education are embedded JSON, never separate tables

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from devconnector.models.user import User  # noqa: F401
from devconnector.models.profile import Profile  # noqa: F401
from devconnector.models.post import Post  # noqa: F401
