"""
Module: consignment_kernel.db.base
Responsibility: Declarative bases shared by the consignor, item, transaction
    and payout tables.
Architecture position: Kernel > DB.  Imported by every model module; imports
    nothing from models/, selectors/ or outer layers.

Invariants enforced:
    - Primary keys are uuid4 values stored as 36-character strings, so the
      same schema runs on PostgreSQL and on SQLite in tests.
    - Money columns are Numeric(38, 9) and map to Decimal; nothing is stored
      as float.
    - Datetime columns are declared timezone-aware.  SQLite drops the offset,
      which is why selectors re-tag values as UTC when reading.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """UUID in Python, String(36) in the database."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else PyUUID(value)


class Base(DeclarativeBase):
    """
    Root of the ORM hierarchy.

    ``Mapped[Decimal]``, ``Mapped[datetime]`` and ``Mapped[UUID]`` columns pick
    their SQL types from ``type_annotation_map``, so models only spell out a
    type when they need a length (String) or a foreign key.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        datetime: DateTime(timezone=True),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )


class TrackedBase(Base):
    """
    Abstract base adding the row creation timestamp.

    Contract:
        created_at is business data here (items age from it, payouts are
        ordered by it), so callers may set it explicitly; the server default
        only fills it when omitted.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
