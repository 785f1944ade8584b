from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base
from db.utils import UUIDType, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(),
        primary_key=True,
        default=uuid.uuid4,
    )

    # not unique: lazy creation is a read-then-write without a lock
    wallet_address: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    wallet_type: Mapped[str] = mapped_column(String(32), nullable=False, default="wagmi")
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    smart_wallet_address: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
