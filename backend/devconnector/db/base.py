"""SQLAlchemy Declarative Base — shared base class for users, profiles and posts.

Invariants:
    - All models inherit from Base
    - Base.metadata is what alembic and the test fixtures create tables from
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DevConnector ORM models."""
    pass
