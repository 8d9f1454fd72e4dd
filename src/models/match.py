"""matches, teams and team_players table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base
from models.mixins import CreatedAtMixin, TimestampMixin


class Match(TimestampMixin, Base):
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("holes_played IN (9, 18)", name="ck_matches_holes_played"),
        CheckConstraint(
            "status IN ('pending', 'teams_ready', 'completed')",
            name="ck_matches_status",
        ),
        Index("idx_matches_group_status", "group_id", "status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(ForeignKey("groups.id"), nullable=False)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("profiles.user_id"), nullable=True)
    format: Mapped[str] = mapped_column(String(32), nullable=False)
    holes_played: Mapped[int] = mapped_column(Integer, nullable=False, default=18)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    match_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    teams: Mapped[list[Team]] = relationship(
        back_populates="match",
        order_by="Team.team_number",
        cascade="all, delete-orphan",
    )


class Team(CreatedAtMixin, Base):
    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("match_id", "team_number", name="uq_team_match_number"),
        CheckConstraint("handicap_strokes >= 0", name="ck_teams_handicap_strokes"),
        CheckConstraint("score IS NULL OR score >= 0", name="ck_teams_score"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(ForeignKey("matches.id"), nullable=False)
    team_number: Mapped[int] = mapped_column(Integer, nullable=False)
    team_handicap: Mapped[float] = mapped_column(Float, nullable=False)
    handicap_strokes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    handicap_override: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    net_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    match: Mapped[Match] = relationship(back_populates="teams")
    players: Mapped[list[TeamPlayer]] = relationship(
        back_populates="team",
        order_by="TeamPlayer.id",
        cascade="all, delete-orphan",
    )


class TeamPlayer(Base):
    """One player on one team, with the handicap frozen at team setup."""

    __tablename__ = "team_players"
    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_player"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.user_id"), nullable=False)
    handicap_used: Mapped[float] = mapped_column(Float, nullable=False)

    team: Mapped[Team] = relationship(back_populates="players")
