from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from ..core.security import now_utc
from .naming import NAMING_CONVENTION, snake_case


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return snake_case(cls.__name__)


class BaseEntity(Base):
    """
    Identity and lifecycle timestamps shared by every entity.

    ``deleted_at`` marks a soft-deleted row; the repositories hide such rows
    unless asked for them explicitly.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


__all__ = ["Base", "BaseEntity"]
