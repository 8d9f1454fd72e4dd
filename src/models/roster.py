"""profiles, groups and group_members table models."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import CreatedAtMixin, GroupPlayerMixin, TimestampMixin


class Profile(TimestampMixin, Base):
    """Player profile holding the group-independent skill index (PHI)."""

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    display_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    phi: Mapped[float | None] = mapped_column(Float, nullable=True)


class Group(TimestampMixin, Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    owner_id: Mapped[int] = mapped_column(ForeignKey("profiles.user_id"), nullable=False)


class GroupMember(GroupPlayerMixin, CreatedAtMixin, Base):
    """One membership; ``gsi`` evolves per group, ``initial_gsi`` records the join-time seed."""

    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_member"),
        Index("idx_group_members_group", "group_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    gsi: Mapped[float | None] = mapped_column(Float, nullable=True)
    initial_gsi: Mapped[float | None] = mapped_column(Float, nullable=True)
