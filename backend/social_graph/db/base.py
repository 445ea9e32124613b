"""SQLAlchemy Declarative Base — shared metadata for users, relations and requests.

Invariants:
    - Every model inherits from Base; Base.metadata is the schema create_all and
      alembic both read
    - Constraint and index names are deterministic (naming_convention), so the
      names in alembic/versions match what create_all produces
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
