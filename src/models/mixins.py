"""SQLAlchemy mixins for common timestamp and skill index columns."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column


class CreatedAtMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class TimestampMixin(CreatedAtMixin):
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class GroupPlayerMixin:
    """Columns identifying one player inside one group."""

    group_id: Mapped[int] = mapped_column(ForeignKey("groups.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.user_id"), nullable=False)


class PrePostIndexMixin:
    pre_index: Mapped[float] = mapped_column(Float, nullable=False)
    index_delta: Mapped[float] = mapped_column(Float, nullable=False)
    post_index: Mapped[float] = mapped_column(Float, nullable=False)
