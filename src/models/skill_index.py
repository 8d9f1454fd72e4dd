"""skill_index_systems and skill_index_events table models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Index, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import CreatedAtMixin, GroupPlayerMixin, PrePostIndexMixin, TimestampMixin


class SkillIndexSystem(TimestampMixin, Base):
    """Named parameter set used to produce skill index events."""

    __tablename__ = "skill_index_systems"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True)
    config_json: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
    )


class SkillIndexEvent(GroupPlayerMixin, PrePostIndexMixin, CreatedAtMixin, Base):
    """Historical group skill index adjustments (one row per player per match)."""

    __tablename__ = "skill_index_events"
    __table_args__ = (
        Index("idx_skill_index_events_group_user", "group_id", "user_id", "event_time"),
        Index("idx_skill_index_events_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    skill_index_system_id: Mapped[int] = mapped_column(
        ForeignKey("skill_index_systems.id"),
        nullable=False,
    )
    match_id: Mapped[int] = mapped_column(ForeignKey("matches.id"), nullable=False)
    event_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    side_number: Mapped[int] = mapped_column(Integer, nullable=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False)
    score_differential: Mapped[float] = mapped_column(Float, nullable=False)
    matches_played_pre: Mapped[int] = mapped_column(Integer, nullable=False)
    holes_played: Mapped[int] = mapped_column(Integer, nullable=False)
    learning_rate: Mapped[float] = mapped_column(Float, nullable=False)
    round_weight: Mapped[float] = mapped_column(Float, nullable=False)
    raw_adjustment: Mapped[float] = mapped_column(Float, nullable=False)
    applied_adjustment: Mapped[float] = mapped_column(Float, nullable=False)
