"""Database bootstrap helpers for basket and order storage."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from storefront.common.config import settings


# Single SQLAlchemy engine per process.
engine = create_engine(settings.database_url, pool_pre_ping=True)
# `expire_on_commit=False` keeps orders readable after commit for payload building.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass


def create_schema(bind=None) -> None:
    """Create all storefront tables that do not exist yet."""

    # Model modules register their tables on `Base.metadata` at import.
    import storefront.services.basket.models  # noqa: F401
    import storefront.services.ordering.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
